import sys

import pytest

from stopwatch_hil import StopwatchError, StopwatchErrorKind, measure

def test_reports_child_status():
    result = measure([sys.executable, '-c', 'import sys; sys.exit(3)'])
    assert result.status == 3
    assert result.exitCode == 3

def test_times_the_child():
    result = measure([sys.executable, '-c', 'import time; time.sleep(0.05)'])
    assert result.status == 0
    assert result.elapsed.total_seconds() >= 0.05
    assert result.render().splitlines()[0] == result.commandLine

def test_fake_clock_elapsed(clock):
    def tick() -> int:
        clock.advance(1_000)
        return clock()
    result = measure([sys.executable, '-c', 'pass'], clock=tick)
    assert result.render().splitlines()[1] == '00:00:01.000'

def test_launch_failure_is_invalid():
    with pytest.raises(StopwatchError) as e:
        measure(['definitely-not-a-real-command-4f1e'])
    assert e.value.kind is StopwatchErrorKind.Invalid

def test_empty_command_is_invalid():
    with pytest.raises(StopwatchError) as e:
        measure([])
    assert e.value.kind is StopwatchErrorKind.Invalid

@pytest.mark.skipif(sys.platform == 'win32', reason='POSIX signals')
def test_signal_death_maps_to_one():
    result = measure([sys.executable, '-c', 'import os, signal; os.kill(os.getpid(), signal.SIGKILL)'])
    assert result.status is None
    assert result.exitCode == 1
