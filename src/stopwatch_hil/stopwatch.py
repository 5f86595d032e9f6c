from __future__ import annotations

import time
import logging
import typing as tp
from datetime import timedelta

from .shared import LapRecord, StopwatchError, StopwatchErrorKind, toMillis

log = logging.getLogger(__name__)

Clock = tp.Callable[[], int]

class Stopwatch:
    '''
    Accumulating stopwatch with an optional lap log.

    Time is read from `clock`, a monotonic source in integer
    nanoseconds. Every operation either succeeds or raises
    `StopwatchError` without touching any state.
    '''

    def __init__(self, clock: Clock = time.monotonic_ns) -> None:
        self.clock = clock
        self.__accumulated_ns = 0
        self.__origin_ns: int | None = None
        self.__laps: list[LapRecord] = []

    @property
    def running(self) -> bool:
        return self.__origin_ns is not None

    @property
    def accumulated(self) -> timedelta:
        '''
        Sum of completed intervals only. Frozen while running.
        '''
        return self.__toTimedelta(self.__accumulated_ns)

    @property
    def laps(self) -> tuple[LapRecord, ...]:
        return tuple(self.__laps)

    def start(self) -> None:
        if self.__origin_ns is not None:
            raise StopwatchError(StopwatchErrorKind.AlreadyRunning)
        self.__origin_ns = self.clock()
        log.debug('started at %d ns', self.__origin_ns)

    def stop(self) -> None:
        if self.__origin_ns is None:
            raise StopwatchError(StopwatchErrorKind.NotRunning)
        self.__accumulated_ns += self.clock() - self.__origin_ns
        self.__origin_ns = None
        log.debug('stopped, accumulated %d ns', self.__accumulated_ns)

    def reset(self) -> None:
        self.__accumulated_ns = 0
        self.__origin_ns = None
        self.__laps = []
        log.debug('reset')

    def elapsed(self) -> timedelta:
        return self.__toTimedelta(self.__elapsedNs())

    def lap(self, label: str | None = None) -> LapRecord:
        '''
        Only valid while running: a lap taken on a stopped watch
        would just repeat the frozen total.
        '''
        if self.__origin_ns is None:
            raise StopwatchError(StopwatchErrorKind.NotRunning)
        record = LapRecord(
            index=len(self.__laps) + 1,
            offset_ms=toMillis(self.elapsed()),
            label=label,
        )
        self.__laps.append(record)
        log.debug('lap %d at %d ms', record.index, record.offset_ms)
        return record

    def __elapsedNs(self) -> int:
        if self.__origin_ns is None:
            return self.__accumulated_ns
        return self.__accumulated_ns + (self.clock() - self.__origin_ns)

    @staticmethod
    def __toTimedelta(ns: int) -> timedelta:
        return timedelta(microseconds=ns // 1_000)
