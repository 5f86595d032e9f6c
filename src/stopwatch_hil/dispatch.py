from __future__ import annotations

import sys
import shlex
import logging
import typing as tp
from dataclasses import dataclass

from . import __version__
from .export import export, renderLaps
from .measure import measure
from .shared import StopwatchError, StopwatchErrorKind, formatDuration
from .stopwatch import Stopwatch
from .watch import watch

log = logging.getLogger(__name__)

COMMAND_WORDS = frozenset((
    'start', 'stop', 'reset', 'elapsed', 'watch',
    'lap', 'laps', 'export', 'measure',
    'help', '-h', '--help', '-V', '--version',
))

HELP = '''
COMMANDS:
  start               Start the stopwatch
  stop                Stop the stopwatch and accumulate time
  reset               Reset to 00:00:00.000 and clear laps
  elapsed             Print the accumulated time
  watch               Show the running time live (Enter to leave)
  lap [label]         Record a lap (stopwatch must be running)
  laps                List laps with deltas
  export json|csv     Print laps as JSON or CSV
  measure -- CMD...   Time an external command
  help                This help (REPL)
  exit/quit           Leave (REPL)

MODES:
  stopwatch run <cmds...>        # batch, strict exit codes
  stopwatch interactive          # explicit REPL
  stopwatch measure -- <cmd...>  # time a command, exit with its status
  stopwatch tui                  # full-screen UI
  stopwatch <cmds...>            # legacy batch (no subcommand)
  stopwatch                      # REPL
'''.strip('\n')

@dataclass(frozen=True)
class Command:
    name: str
    args: tuple[str, ...] = ()

    def __str__(self) -> str:
        return shlex.join((self.name, *self.args))

def parseLine(line: str) -> Command | None:
    '''
    One REPL line. Returns None for a blank line.
    '''
    try:
        words = shlex.split(line)
    except ValueError as e:
        raise StopwatchError(StopwatchErrorKind.Invalid, str(e)) from e
    if not words:
        return None
    return Command(words[0], tuple(words[1:]))

def groupTokens(tokens: tp.Sequence[str]) -> list[Command]:
    '''
    Batch argv to commands. `export` takes the next token; `lap`
    takes the next token unless it is itself a command; `measure`
    takes everything left. A token containing spaces is parsed as
    a whole command line.
    '''
    commands: list[Command] = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        i += 1
        if any(c.isspace() for c in token.strip()):
            cmd = parseLine(token)
            if cmd is not None:
                commands.append(cmd)
            continue
        match token:
            case 'export' if i < len(tokens):
                commands.append(Command(token, (tokens[i], )))
                i += 1
            case 'lap' if i < len(tokens) and tokens[i] not in COMMAND_WORDS:
                commands.append(Command(token, (tokens[i], )))
                i += 1
            case 'measure':
                commands.append(Command(token, tuple(tokens[i:])))
                i = len(tokens)
            case _:
                commands.append(Command(token))
    return commands

class Dispatcher:
    def __init__(
        self, sw: Stopwatch | None = None,
        out: tp.TextIO | None = None,
        stdin: tp.TextIO | None = None,
        watch_interval: float = 0.1,
    ) -> None:
        self.sw = Stopwatch() if sw is None else sw
        self.out = out
        self.stdin = stdin
        self.watch_interval = watch_interval

    @property
    def stdout(self) -> tp.TextIO:
        return sys.stdout if self.out is None else self.out

    def print(self, text: str) -> None:
        print(text, file=self.stdout)

    def dispatchLine(self, line: str) -> None:
        cmd = parseLine(line)
        if cmd is not None:
            self.dispatch(cmd)

    def dispatch(self, cmd: Command) -> None:
        log.debug('dispatch %s', cmd)
        sw = self.sw
        match cmd.name, cmd.args:
            case 'start', ():
                sw.start()
            case 'stop', ():
                sw.stop()
            case 'reset', ():
                sw.reset()
            case 'elapsed', ():
                self.print(formatDuration(sw.elapsed()))
            case 'watch', ():
                watch(
                    sw, interval=self.watch_interval,
                    stdin=self.stdin, stdout=self.out,
                )
            case 'lap', label_words:
                record = sw.lap(' '.join(label_words) or None)
                self.print(
                    f'lap {record.index}  {formatDuration(record.offset_ms)}'
                    + (f'  {record.label}' if record.label else '')
                )
            case 'laps', ():
                self.print(renderLaps(sw.laps))
            case 'export', (fmt, ):
                self.print(export(sw.laps, fmt).rstrip('\n'))
            case 'measure', argv:
                if argv[:1] == ('--', ):
                    argv = argv[1:]
                self.print(measure(argv).render())
            case name, () if name.lower() == 'help' or name in ('-h', '--help'):
                self.print(HELP)
            case ('-V' | '--version'), ():
                self.print(f'stopwatch-hil v{__version__}')
            case _:
                raise StopwatchError(StopwatchErrorKind.Invalid, str(cmd))
