import asyncio

import pytest

from errors import PlaybackError
from engine import PlaybackController, PlaybackState

STEPS = ("a", "b", "c", "d")


def make(clock, delay_ms=500, seen=None):
    on_step = (lambda idx, step: seen.append((idx, step))) if seen is not None else None
    return PlaybackController(delay_ms=delay_ms, on_step=on_step, clock=clock)


class TestLifecycle:
    def test_initial_state(self, clock):
        ctrl = make(clock)
        assert ctrl.state is PlaybackState.IDLE
        assert ctrl.index == -1
        assert ctrl.current_step is None
        assert ctrl.tick() == 0

    def test_start_shows_first_snapshot(self, clock):
        seen = []
        ctrl = make(clock, seen=seen)
        ctrl.start(STEPS)
        assert ctrl.state is PlaybackState.RUNNING
        assert ctrl.index == 0
        assert ctrl.current_step == "a"
        assert seen == [(0, "a")]

    def test_empty_sequence_completes_immediately(self, clock):
        ctrl = make(clock)
        ctrl.start(())
        assert ctrl.state is PlaybackState.COMPLETED
        assert ctrl.current_step is None

    def test_single_snapshot_completes_immediately(self, clock):
        ctrl = make(clock)
        ctrl.start(("only",))
        assert ctrl.state is PlaybackState.COMPLETED
        assert ctrl.current_step == "only"

    def test_cancel_discards_run(self, clock):
        ctrl = make(clock)
        gen = ctrl.start(STEPS)
        ctrl.cancel()
        assert ctrl.state is PlaybackState.CANCELLED
        assert ctrl.index == -1
        assert ctrl.total_steps == 0
        assert ctrl.generation != gen
        clock.advance(5000)
        assert ctrl.tick() == 0

    def test_cancel_is_noop_when_not_active(self, clock):
        ctrl = make(clock)
        ctrl.cancel()
        assert ctrl.state is PlaybackState.IDLE
        ctrl.start(("x",))
        ctrl.cancel()
        assert ctrl.state is PlaybackState.COMPLETED

    def test_reset(self, clock):
        ctrl = make(clock)
        ctrl.start(STEPS)
        ctrl.reset()
        assert ctrl.state is PlaybackState.IDLE
        assert ctrl.current_step is None


class TestTick:
    def test_advances_once_per_window(self, clock):
        seen = []
        ctrl = make(clock, delay_ms=500, seen=seen)
        ctrl.start(STEPS)
        clock.advance(499)
        assert ctrl.tick() == 0
        clock.advance(2)
        assert ctrl.tick() == 1
        assert ctrl.index == 1
        clock.advance(1000)
        assert ctrl.tick() == 2
        assert ctrl.state is PlaybackState.COMPLETED
        assert [i for i, _ in seen] == [0, 1, 2, 3]

    def test_index_never_decreases(self, clock):
        ctrl = make(clock)
        ctrl.start(STEPS)
        indices = []
        for _ in range(10):
            clock.advance(300)
            ctrl.tick()
            indices.append(ctrl.index)
        assert indices == sorted(indices)
        assert indices[-1] == len(STEPS) - 1

    def test_pause_blocks_advance(self, clock):
        ctrl = make(clock)
        ctrl.start(STEPS)
        clock.advance(300)
        ctrl.pause()
        assert ctrl.state is PlaybackState.PAUSED
        clock.advance(10_000)
        assert ctrl.tick() == 0
        assert ctrl.index == 0

    def test_resume_starts_a_fresh_window(self, clock):
        ctrl = make(clock)
        ctrl.start(STEPS)
        clock.advance(400)
        ctrl.pause()
        ctrl.resume()
        clock.advance(400)
        assert ctrl.tick() == 0
        clock.advance(101)
        assert ctrl.tick() == 1

    def test_pause_and_resume_are_idempotent(self, clock):
        ctrl = make(clock)
        ctrl.resume()
        assert ctrl.state is PlaybackState.IDLE
        ctrl.start(STEPS)
        ctrl.pause()
        ctrl.pause()
        assert ctrl.state is PlaybackState.PAUSED
        ctrl.resume()
        ctrl.resume()
        assert ctrl.state is PlaybackState.RUNNING
        ctrl.toggle()
        assert ctrl.is_paused

    def test_speed_change_applies_to_next_wait(self, clock):
        ctrl = make(clock, delay_ms=1000)
        ctrl.start(STEPS)
        ctrl.set_speed(200)
        # the open window keeps its 1000 ms deadline
        clock.advance(200)
        assert ctrl.tick() == 0
        clock.advance(801)
        assert ctrl.tick() == 1
        # the next window uses 200 ms
        clock.advance(200)
        assert ctrl.tick() == 1

    def test_speed_is_clamped(self, clock):
        ctrl = make(clock)
        assert ctrl.set_speed(5) == 100
        assert ctrl.set_speed(99_999) == 2000
        assert ctrl.set_speed("fast") == 200
        assert ctrl.set_preset("unknown") == 500

    def test_next_step_while_paused(self, clock):
        ctrl = make(clock)
        ctrl.start(STEPS)
        ctrl.pause()
        assert ctrl.next_step()
        assert ctrl.index == 1
        assert ctrl.state is PlaybackState.PAUSED
        assert ctrl.next_step()
        assert ctrl.next_step()
        assert ctrl.state is PlaybackState.COMPLETED
        assert not ctrl.next_step()

    def test_restart_reproduces_sequence(self, clock):
        first, second = [], []
        ctrl = make(clock, seen=first)
        ctrl.start(STEPS)
        clock.advance(501)
        ctrl.tick()
        ctrl.cancel()

        ctrl.on_step = lambda idx, step: second.append((idx, step))
        ctrl.start(STEPS)
        for _ in range(len(STEPS)):
            clock.advance(501)
            ctrl.tick()
        assert second == list(enumerate(STEPS))
        assert first == second[:2]


class TestAsyncRun:
    def test_runs_to_completion(self):
        seen = []
        ctrl = PlaybackController(delay_ms=100, on_step=lambda i, s: seen.append(s))
        ctrl.start(("a", "b", "c"))
        state = asyncio.run(ctrl.run())
        assert state is PlaybackState.COMPLETED
        assert seen == ["a", "b", "c"]

    def test_cancel_during_wait_stops_without_change(self):
        ctrl = PlaybackController(delay_ms=100)
        ctrl.start(STEPS)

        async def scenario():
            task = asyncio.ensure_future(ctrl.run())
            await asyncio.sleep(0.05)
            ctrl.cancel()
            return await task

        state = asyncio.run(scenario())
        assert state is PlaybackState.CANCELLED
        assert ctrl.index == -1

    def test_abandoned_wait_ignores_new_run(self):
        ctrl = PlaybackController(delay_ms=100)
        ctrl.start(STEPS)

        async def scenario():
            old = asyncio.ensure_future(ctrl.run())
            await asyncio.sleep(0.05)
            ctrl.start(("x", "y"))
            await old
            # the old driver must not have advanced the new run
            return ctrl.index

        assert asyncio.run(scenario()) == 0

    def test_pause_holds_then_resume_finishes(self):
        ctrl = PlaybackController(delay_ms=100)
        ctrl.start(("a", "b"))

        async def scenario():
            ctrl.pause()
            task = asyncio.ensure_future(ctrl.run(poll_interval=0.01))
            await asyncio.sleep(0.25)
            held = ctrl.index
            ctrl.resume()
            return held, await task

        held, state = asyncio.run(scenario())
        assert held == 0
        assert state is PlaybackState.COMPLETED
        assert ctrl.index == 1

    def test_resume_mid_wait_restarts_the_window(self):
        ctrl = PlaybackController(delay_ms=200)
        ctrl.start(("a", "b"))

        async def scenario():
            task = asyncio.ensure_future(ctrl.run())
            await asyncio.sleep(0.1)
            ctrl.pause()
            ctrl.resume()
            # the first window would have closed at 0.2; the fresh one closes at 0.3
            await asyncio.sleep(0.15)
            held = ctrl.index
            return held, await task

        held, state = asyncio.run(scenario())
        assert held == 0
        assert state is PlaybackState.COMPLETED
        assert ctrl.index == 1

    def test_run_requires_start(self):
        ctrl = PlaybackController()
        with pytest.raises(PlaybackError):
            asyncio.run(ctrl.run())
