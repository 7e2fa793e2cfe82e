"""
stepper.py — Playback Controller
=================================
The PlaybackController is the ONLY object a renderer talks to during a
run.  It owns the materialised snapshot tuple, the visible index and
the inter-step delay, and exposes start / pause / resume / cancel /
set_speed.

State machine:
    IDLE       →  start()   →  RUNNING     (empty sequence → COMPLETED)
    RUNNING    →  pause()   →  PAUSED
    PAUSED     →  resume()  →  RUNNING
    RUNNING    →  (last snapshot shown) → COMPLETED
    any active →  cancel()  →  CANCELLED
    any        →  reset()   →  IDLE

Two ways to drive it:

  • tick(now)  – polled hosts (the Flask surface, a GUI timer) call this
                 periodically; it advances one snapshot per elapsed
                 delay window.
  • run()      – an asyncio coroutine that sleeps `delay_ms` between
                 snapshots.

Both re-read pause / cancel / speed from the controller at every
suspension point.  Every start / cancel / reset bumps `generation`; a
wait that wakes up under a different generation belongs to an abandoned
run and returns without touching anything.

The index only moves forward within a run.  Not thread-safe: drive it
from one thread or one event loop.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from config import DEFAULT_DELAY_MS, MIN_DELAY_MS, MAX_DELAY_MS, SPEED_PRESETS, clamp_delay
from errors import PlaybackError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ACTIVE_STATES = (PlaybackState.RUNNING, PlaybackState.PAUSED)


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state      : Current PlaybackState.
        steps      : The snapshot tuple being replayed (empty when idle).
        index      : Index into `steps` currently visible (-1 when nothing is).
        delay_ms   : Milliseconds between two snapshots.
        generation : Run counter; changes on start / cancel / reset.
        on_step    : Optional callback(index, snapshot) fired whenever the
                     visible index changes.  Renderers hook in here.
    """

    def __init__(
        self,
        delay_ms: int = DEFAULT_DELAY_MS,
        on_step: Optional[Callable[[int, object], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.state:      PlaybackState = PlaybackState.IDLE
        self.steps:      Tuple         = ()
        self.index:      int           = -1
        self.delay_ms:   int           = clamp_delay(delay_ms)
        self.generation: int           = 0
        self.on_step:    Optional[Callable[[int, object], None]] = on_step

        self._clock = clock
        # deadline of the open wait window, fixed when the window opens;
        # None while no window is open
        self._deadline: Optional[float] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, steps: Sequence, delay_ms: Optional[int] = None) -> int:
        """
        Attach a snapshot sequence and show index 0.

        Any previous run is abandoned.  Returns the new generation.
        """
        self.generation += 1
        self.steps = tuple(steps)
        if delay_ms is not None:
            self.delay_ms = clamp_delay(delay_ms)

        if not self.steps:
            self.index = -1
            self._deadline = None
            self._set_state(PlaybackState.COMPLETED)
            return self.generation

        self._set_state(PlaybackState.RUNNING)
        self._goto(0)
        if self.index == len(self.steps) - 1:
            self._set_state(PlaybackState.COMPLETED)
        else:
            self._open_window(self._clock())
        return self.generation

    def cancel(self) -> None:
        """Abandon the current run.  No-op unless RUNNING or PAUSED."""
        if self.state not in ACTIVE_STATES:
            return
        self.generation += 1
        self._discard()
        self._set_state(PlaybackState.CANCELLED)

    def reset(self) -> None:
        """Back to IDLE; caller must start() again."""
        self.generation += 1
        self._discard()
        self._set_state(PlaybackState.IDLE)

    # ------------------------------------------------------------------
    # Pause / Resume
    # ------------------------------------------------------------------
    def pause(self) -> None:
        if self.state != PlaybackState.RUNNING:
            return
        self._deadline = None
        self._set_state(PlaybackState.PAUSED)

    def resume(self) -> None:
        if self.state != PlaybackState.PAUSED:
            return
        self._set_state(PlaybackState.RUNNING)
        # a fresh full window starts at resume time
        self._open_window(self._clock())

    def toggle(self) -> None:
        if self.state == PlaybackState.RUNNING:
            self.pause()
        else:
            self.resume()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, delay_ms) -> int:
        """
        Change the inter-step delay.  Takes effect from the next wait
        window; a window already open keeps the deadline it started with.
        Accepts milliseconds or a SPEED_PRESETS name.  Returns the
        clamped delay.
        """
        self.delay_ms = clamp_delay(delay_ms, MIN_DELAY_MS, MAX_DELAY_MS)
        logger.debug("delay set to %d ms", self.delay_ms)
        return self.delay_ms

    def set_preset(self, preset: str) -> int:
        return self.set_speed(SPEED_PRESETS.get(preset, DEFAULT_DELAY_MS))

    # ------------------------------------------------------------------
    # Manual navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """
        Advance one snapshot by hand (works while PAUSED too).
        Returns False once the last snapshot is visible or nothing runs.
        """
        if self.state not in ACTIVE_STATES:
            return False
        if self.index + 1 >= len(self.steps):
            return False
        self._advance()
        if self.state == PlaybackState.RUNNING:
            self._open_window(self._clock())
        return True

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer / polling request)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> int:
        """
        Advance by as many snapshots as full delay windows have elapsed
        since the last advance.  Returns the number of snapshots taken.
        """
        if self.state != PlaybackState.RUNNING or self._deadline is None:
            return 0
        now = self._clock() if now is None else now

        taken = 0
        while self.state == PlaybackState.RUNNING:
            if now < self._deadline:
                break
            deadline = self._deadline
            self._advance()
            taken += 1
            if self.state == PlaybackState.RUNNING:
                # next window opens where the elapsed one closed
                self._open_window(deadline)
        return taken

    # ------------------------------------------------------------------
    # asyncio driver
    # ------------------------------------------------------------------
    async def run(self, poll_interval: float = 0.01) -> PlaybackState:
        """
        Play the attached run to the end (or until cancelled), sleeping
        `delay_ms` between snapshots.  While paused it idles in
        `poll_interval` slices.  Returns the state it stopped in.
        """
        if self.state == PlaybackState.IDLE:
            raise PlaybackError("Nothing to play: call start() first.")

        generation = self.generation
        while True:
            if self.generation != generation:
                return self.state
            if self.state == PlaybackState.PAUSED:
                await asyncio.sleep(poll_interval)
                continue
            if self.state != PlaybackState.RUNNING:
                return self.state

            if self._deadline is None:
                self._open_window(self._clock())
            remaining = self._deadline - self._clock()
            if remaining > 0:
                # sleep to the deadline of the open window, then re-read
                # everything: a pause/resume meanwhile has moved it
                await asyncio.sleep(remaining)
                continue

            self._advance()
            if self.state == PlaybackState.RUNNING:
                self._open_window(self._clock())

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self):
        if 0 <= self.index < len(self.steps):
            return self.steps[self.index]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_running(self) -> bool:
        return self.state == PlaybackState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.state == PlaybackState.PAUSED

    @property
    def is_finished(self) -> bool:
        return self.state in (PlaybackState.COMPLETED, PlaybackState.CANCELLED)

    def snapshot(self) -> dict:
        """Playback status without the snapshot payload."""
        return {
            "state":       self.state.value,
            "index":       self.index,
            "total_steps": self.total_steps,
            "delay_ms":    self.delay_ms,
            "generation":  self.generation,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _advance(self) -> None:
        self._goto(self.index + 1)
        if self.index >= len(self.steps) - 1:
            self._deadline = None
            self._set_state(PlaybackState.COMPLETED)

    def _open_window(self, start: float) -> None:
        self._deadline = start + self.delay_ms / 1000.0

    def _goto(self, idx: int) -> None:
        self.index = idx
        if self.on_step is not None:
            self.on_step(idx, self.steps[idx])

    def _discard(self) -> None:
        self.steps = ()
        self.index = -1
        self._deadline = None

    def _set_state(self, state: PlaybackState) -> None:
        if state != self.state:
            logger.debug("playback %s → %s (gen %d)", self.state.value, state.value, self.generation)
        self.state = state
