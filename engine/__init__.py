"""
engine/
-------
Playback & recording layer.

    from engine import PlaybackController, Recorder, compare
"""

from engine.stepper  import PlaybackController, PlaybackState
from engine.recorder import Recorder, Trace, RunMetrics, ComparisonResult, compare, result_to_dict

__all__ = [
    "PlaybackController",
    "PlaybackState",
    "Recorder",
    "Trace",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "result_to_dict",
]
