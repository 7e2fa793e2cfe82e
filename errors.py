"""
errors.py — Exception Taxonomy
===============================
Everything the core raises derives from VisualizerError.

    PreconditionError  – bad input, rejected before any step executes
    CycleError         – cyclic graph handed to topological sort
    PlaybackError      – playback controller or recorder used out of order

Resource-exhaustion risk (large N for the placement solvers) is NOT an
error: it is an advisory string from config.board_size_warning().
A negative cycle seen by Bellman-Ford is NOT an error either: it is
flagged on the result.
"""

from typing import Optional, Sequence


class VisualizerError(Exception):
    """Base class for every error raised by the algorithm core."""


class PreconditionError(VisualizerError, ValueError):
    """Input violates an algorithm's precondition (malformed graph, bad size, …)."""


class CycleError(PreconditionError):
    """
    Raised when topological sort is given a graph containing a cycle.

    Attributes:
        cycle : NodeIds along the offending cycle, first node repeated last.
    """

    def __init__(self, cycle: Sequence[int], message: Optional[str] = None):
        self.cycle = list(cycle)
        super().__init__(
            message or f"Graph has a cycle: {' → '.join(str(n) for n in self.cycle)}"
        )


class PlaybackError(VisualizerError, RuntimeError):
    """Controller or Recorder used out of order (e.g. run() before start())."""


__all__ = ["VisualizerError", "PreconditionError", "CycleError", "PlaybackError"]
