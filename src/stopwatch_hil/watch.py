'''
Live display of a running stopwatch.

One watch session = one render loop on the calling thread + one
single-shot listener thread. They share nothing but a `CancelFlag`.
The listener never touches the stopwatch.
'''

from __future__ import annotations

import sys
import logging
import threading
import typing as tp
from datetime import timedelta

from .shared import StopwatchError, StopwatchErrorKind, formatDuration
from .stopwatch import Stopwatch

log = logging.getLogger(__name__)

HIDE_CURSOR = '\x1b[?25l'
SHOW_CURSOR = '\x1b[?25h'
HINT = '[Press Enter to switch command]'

class CancelFlag:
    '''
    Raised once by the listener, polled by the render loop.
    '''

    def __init__(self) -> None:
        self.__event = threading.Event()

    def raise_(self) -> None:
        self.__event.set()

    def isRaised(self) -> bool:
        return self.__event.is_set()

    def wait(self, timeout: float) -> bool:
        return self.__event.wait(timeout)

def ensureRunning(sw: Stopwatch) -> None:
    try:
        sw.start()
    except StopwatchError as e:
        if e.kind is not StopwatchErrorKind.AlreadyRunning:
            raise
        log.debug('watch attached to an already running stopwatch')

def ticks(
    sw: Stopwatch, cancel: CancelFlag, interval: float = 0.1,
) -> tp.Generator[timedelta, None, None]:
    '''
    Elapsed time every `interval` seconds until `cancel` is raised,
    then one last reading. Each call starts a fresh sequence.
    '''
    while not cancel.isRaised():
        yield sw.elapsed()
        cancel.wait(interval)
    yield sw.elapsed()

def snapshots(
    sw: Stopwatch, cancel: CancelFlag, interval: float = 0.1,
) -> tp.Generator[str, None, None]:
    for d in ticks(sw, cancel, interval):
        yield formatDuration(d)

def listenForEnter(stdin: tp.TextIO, cancel: CancelFlag) -> None:
    try:
        stdin.readline()
    except (OSError, ValueError) as e:
        log.warning('watch listener could not read input: %s', e)
    finally:
        cancel.raise_()

def watch(
    sw: Stopwatch, *,
    interval: float = 0.1,
    stdin: tp.TextIO | None = None,
    stdout: tp.TextIO | None = None,
    cancel: CancelFlag | None = None,
) -> timedelta:
    '''
    Starts `sw` if idle, then redraws its elapsed time in place until
    a line arrives on `stdin` (or `cancel` is raised by the caller).
    Never stops `sw`. Returns the elapsed time of the final render.
    '''
    stdin  = sys.stdin  if stdin  is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    ensureRunning(sw)
    if cancel is None:
        cancel = CancelFlag()
        threading.Thread(
            target=listenForEnter, args=(stdin, cancel),
            name='watch-listener', daemon=True,
        ).start()

    stdout.write(HINT + '\n' + HIDE_CURSOR)
    stdout.flush()
    last = timedelta(0)
    try:
        for last in ticks(sw, cancel, interval):
            stdout.write('\r' + formatDuration(last))
            stdout.flush()
    finally:
        stdout.write('\n' + SHOW_CURSOR)
        stdout.flush()
    return last
