from __future__ import annotations

import shlex
import logging
import subprocess
import typing as tp
from datetime import timedelta

from pydantic import BaseModel, ConfigDict

from .shared import StopwatchError, StopwatchErrorKind, formatDuration
from .stopwatch import Clock, Stopwatch

log = logging.getLogger(__name__)

class MeasureResult(BaseModel):
    argv: tuple[str, ...]
    elapsed: timedelta
    status: int | None  # None when killed by a signal

    model_config = ConfigDict(
        frozen=True,
    )

    @property
    def commandLine(self) -> str:
        return shlex.join(self.argv)

    @property
    def exitCode(self) -> int:
        return 1 if self.status is None else self.status

    def render(self) -> str:
        return f'{self.commandLine}\n{formatDuration(self.elapsed)}'

def measure(
    argv: tp.Sequence[str], clock: Clock | None = None,
) -> MeasureResult:
    '''
    Times `argv` from launch to exit on a fresh stopwatch.
    Failing to launch is `Invalid`; a nonzero exit is not an error.
    '''
    if not argv:
        raise StopwatchError(StopwatchErrorKind.Invalid, 'no command to measure')
    sw = Stopwatch() if clock is None else Stopwatch(clock)
    log.info('measuring %s', shlex.join(argv))
    sw.start()
    try:
        completed = subprocess.run(list(argv))
    except OSError as e:
        log.warning('could not launch %r: %s', argv[0], e)
        raise StopwatchError(StopwatchErrorKind.Invalid, str(e)) from e
    finally:
        sw.stop()
    code = completed.returncode
    return MeasureResult(
        argv=tuple(argv),
        elapsed=sw.elapsed(),
        status=code if code >= 0 else None,
    )
