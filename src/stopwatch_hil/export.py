from __future__ import annotations

import io
import csv
import json
import typing as tp
from dataclasses import dataclass

from .shared import LapRecord, StopwatchError, StopwatchErrorKind, formatDuration

FORMATS = ('json', 'csv')
CSV_HEADER = ('index', 'time_ms', 'label')

@dataclass(frozen=True)
class LapRow:
    index: int
    at: str
    delta: str
    label: str

def lapRows(laps: tp.Sequence[LapRecord]) -> list[LapRow]:
    '''
    The first lap's delta is measured from zero.
    '''
    rows = []
    previous_ms = 0
    for lap in laps:
        rows.append(LapRow(
            index=lap.index,
            at=formatDuration(lap.offset_ms),
            delta=formatDuration(lap.offset_ms - previous_ms),
            label=lap.label or '',
        ))
        previous_ms = lap.offset_ms
    return rows

def renderLaps(laps: tp.Sequence[LapRecord]) -> str:
    if not laps:
        return '(no laps)'
    lines = [f'{"#":>4}  {"time":<12}  {"delta":<12}  label']
    for row in lapRows(laps):
        lines.append(
            f'{row.index:>4}  {row.at:<12}  {row.delta:<12}  {row.label}'.rstrip()
        )
    return '\n'.join(lines)

def toJson(laps: tp.Sequence[LapRecord], indent: int | None = 2) -> str:
    return json.dumps(
        [lap.model_dump(by_alias=True) for lap in laps], indent=indent,
    )

def toCsv(laps: tp.Sequence[LapRecord]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    for lap in laps:
        writer.writerow((lap.index, lap.offset_ms, lap.label or ''))
    return buf.getvalue()

def export(laps: tp.Sequence[LapRecord], fmt: str) -> str:
    match fmt.lower():
        case 'json':
            return toJson(laps)
        case 'csv':
            return toCsv(laps)
        case _:
            raise StopwatchError(
                StopwatchErrorKind.Invalid, f'unknown export format {fmt!r}',
            )
