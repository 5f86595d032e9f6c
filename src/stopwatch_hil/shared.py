from __future__ import annotations

from datetime import timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ONE_MS = timedelta(milliseconds=1)

class StopwatchErrorKind(Enum):
    AlreadyRunning = 'AlreadyRunning'
    NotRunning = 'NotRunning'
    Invalid = 'Invalid'

class StopwatchError(Exception):
    def __init__(
        self, kind: StopwatchErrorKind, detail: str | None = None,
    ) -> None:
        super().__init__(kind.value if detail is None else f'{kind.value}: {detail}')
        self.kind = kind
        self.detail = detail

class LapRecord(BaseModel):
    index: int = Field(ge=1)
    offset_ms: int = Field(ge=0, serialization_alias='at_ms')
    label: str | None = None

    model_config = ConfigDict(
        frozen=True,
    )

    @property
    def offset(self) -> timedelta:
        return timedelta(milliseconds=self.offset_ms)

def toMillis(d: timedelta) -> int:
    '''
    Truncates, never rounds.
    '''
    return d // ONE_MS

def formatDuration(d: timedelta | int) -> str:
    '''
    `HH:MM:SS.mmm`. Accepts a timedelta or integer milliseconds.
    Hours widen past two digits instead of wrapping.
    '''
    ms = d if isinstance(d, int) else toMillis(d)
    h = ms // 3_600_000
    m = (ms % 3_600_000) // 60_000
    s = (ms % 60_000) // 1_000
    mmm = ms % 1_000
    return f'{h:02}:{m:02}:{s:02}.{mmm:03}'
