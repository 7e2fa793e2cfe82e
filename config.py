"""
config.py — Defaults, Bounds & Logging
=======================================
Module-level settings in one place.  The Flask app loads the UPPERCASE
names with `app.config.from_object(config)` and then lets the
environment override them (`VISUALIZER_DEFAULT_DELAY_MS=250`, …).

    from config import clamp_delay, board_size_warning, setup_logging
"""

import logging
import sys
from typing import Optional

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Playback speed (milliseconds per step)
# ---------------------------------------------------------------------------
DEFAULT_DELAY_MS = 500
MIN_DELAY_MS     = 100
MAX_DELAY_MS     = 2000

SPEED_PRESETS = {
    "slow":   2000,   # teaching mode
    "medium": 1000,
    "normal": 500,
    "fast":   200,
    "turbo":  100,    # demo mode
}


# ---------------------------------------------------------------------------
# Input bounds
# ---------------------------------------------------------------------------
# Placement: above these N the search still runs but the user is warned.
SAFE_BOARD_SIZE = {
    "queen":  8,
    "rook":   8,
    "knight": 6,
}
DEFAULT_BOARD_SIZE = 4

MIN_ARRAY_SIZE     = 5
MAX_ARRAY_SIZE     = 50
DEFAULT_ARRAY_SIZE = 20
ARRAY_VALUE_LOW    = 10
ARRAY_VALUE_HIGH   = 309

LOG_LEVEL = "INFO"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def clamp_delay(delay_ms, low: int = MIN_DELAY_MS, high: int = MAX_DELAY_MS) -> int:
    """Clamp a requested delay into [low, high]; None falls back to the default."""
    if delay_ms is None:
        return DEFAULT_DELAY_MS
    if isinstance(delay_ms, str):
        if delay_ms in SPEED_PRESETS:
            return SPEED_PRESETS[delay_ms]
        delay_ms = float(delay_ms)
    return int(max(low, min(high, delay_ms)))


def clamp_array_size(size: int) -> int:
    return max(MIN_ARRAY_SIZE, min(MAX_ARRAY_SIZE, int(size)))


def board_size_warning(n: int, kind="queen") -> Optional[str]:
    """
    Advisory for placement runs that may take a long time.

    Returns a human-readable warning (also logged at WARNING) when `n`
    exceeds the safe bound for the piece, else None.  Never blocks.
    """
    piece = str(getattr(kind, "value", kind)).lower()
    bound = SAFE_BOARD_SIZE.get(piece)
    if bound is None or n <= bound:
        return None
    msg = (
        f"N={n} exceeds the safe bound of {bound} for {piece}s; "
        f"the search may take a long time."
    )
    logger.warning(msg)
    return msg


def setup_logging(level: str = LOG_LEVEL, format_type: str = "structured") -> logging.Logger:
    """Install a stdout handler on the root logger and return the app logger."""
    log_level = getattr(logging, str(level).upper(), logging.INFO)

    if format_type == "structured":
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    else:
        formatter = logging.Formatter('%(levelname)s - %(message)s')

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    return logging.getLogger("visualizer")
