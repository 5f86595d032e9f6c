import pytest

from stopwatch_hil import Stopwatch

MS = 1_000_000  # ns

class FakeClock:
    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms * MS

@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()

@pytest.fixture
def sw(clock: FakeClock) -> Stopwatch:
    return Stopwatch(clock)
