import sys, os

# Ensure the repo root is on path for test imports
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pytest


class FakeClock:
    """Manually advanced stand-in for time.monotonic()."""

    def __init__(self, start_ms: int = 0):
        self.ms = start_ms

    def __call__(self) -> float:
        return self.ms / 1000.0

    def advance(self, ms: int) -> float:
        self.ms += ms
        return self()


@pytest.fixture
def clock():
    return FakeClock()
