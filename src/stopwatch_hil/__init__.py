__version__ = '0.1.0'

from .shared import LapRecord, StopwatchError, StopwatchErrorKind, formatDuration
from .stopwatch import Stopwatch
from .watch import CancelFlag, ensureRunning, watch
from .measure import MeasureResult, measure

__all__ = [
    "LapRecord", "StopwatchError", "StopwatchErrorKind", "formatDuration",
    "Stopwatch", "CancelFlag", "ensureRunning", "watch",
    "MeasureResult", "measure",
]
