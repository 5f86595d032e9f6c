from __future__ import annotations

import sys
import logging
import argparse
import typing as tp

from pydantic import ValidationError

from . import __version__
from .config import Settings
from .dispatch import Dispatcher, groupTokens
from .measure import measure
from .shared import StopwatchError

log = logging.getLogger(__name__)

SUBCOMMANDS = ('run', 'interactive', 'measure', 'tui')

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2

def buildParser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='stopwatch',
        description='Stopwatch CLI (REPL + batch) with realtime watch',
    )
    parser.add_argument(
        '-V', '--version', action='version',
        version=f'stopwatch-hil v{__version__}',
    )
    sub = parser.add_subparsers(dest='mode')
    run = sub.add_parser('run', help='Batch mode, e.g. `stopwatch run start elapsed stop`')
    run.add_argument('cmds', nargs=argparse.REMAINDER)
    sub.add_parser('interactive', help='Explicit REPL (also the default)')
    m = sub.add_parser('measure', help='Time an external command: `stopwatch measure -- CMD...`')
    m.add_argument('argv', nargs=argparse.REMAINDER)
    sub.add_parser('tui', help='Full-screen stopwatch')
    return parser

def runBatch(
    tokens: tp.Sequence[str], dispatcher: Dispatcher,
    err: tp.TextIO | None = None,
) -> int:
    err = sys.stderr if err is None else err
    commands = groupTokens(tokens)
    if not commands:
        print('error: no commands. Use `stopwatch -h` for help.', file=err)
        return EXIT_USAGE
    for cmd in commands:
        try:
            dispatcher.dispatch(cmd)
        except StopwatchError as e:
            print(f'error: {e.kind.value} (cmd: {cmd})', file=err)
            return EXIT_FAILED
    return EXIT_OK

def runRepl(
    dispatcher: Dispatcher,
    stdin: tp.TextIO | None = None,
    err: tp.TextIO | None = None,
) -> int:
    stdin = sys.stdin  if stdin is None else stdin
    err   = sys.stderr if err   is None else err
    dispatcher.print('Stopwatch REPL. Commands: start | stop | reset | elapsed | watch | lap | laps | export | help | exit')
    while True:
        dispatcher.stdout.write('> ')
        dispatcher.stdout.flush()
        line = stdin.readline()
        if not line:
            break
        cmd = line.strip()
        if cmd in ('exit', 'quit'):
            break
        try:
            dispatcher.dispatchLine(cmd)
        except StopwatchError as e:
            print(f'error: {e.kind.value} (cmd: {cmd})', file=err)
    return EXIT_OK

def runMeasure(
    argv: tp.Sequence[str], out: tp.TextIO | None = None,
    err: tp.TextIO | None = None,
) -> int:
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    if argv[:1] == ['--']:
        argv = argv[1:]
    try:
        result = measure(argv)
    except StopwatchError as e:
        print(f'error: {e}', file=err)
        return EXIT_FAILED
    print(result.render(), file=out)
    return result.exitCode

def runTui(settings: Settings) -> int:
    from .tui import StopwatchApp
    StopwatchApp(refresh_interval=settings.watchInterval).run()
    return EXIT_OK

def main(argv: tp.Sequence[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        settings = Settings.fromEnv()
    except ValidationError as e:
        print(f'error: bad configuration\n{e}', file=sys.stderr)
        return EXIT_USAGE
    logging.basicConfig(level=settings.log_level)

    dispatcher = Dispatcher(watch_interval=settings.watchInterval)
    if argv and argv[0] not in SUBCOMMANDS and not argv[0].startswith('-'):
        return runBatch(argv, dispatcher)

    args = buildParser().parse_args(argv)
    log.debug('mode %s', args.mode)
    match args.mode:
        case 'run':
            return runBatch(args.cmds, dispatcher)
        case 'measure':
            return runMeasure(args.argv)
        case 'tui':
            return runTui(settings)
        case _:
            return runRepl(dispatcher)

if __name__ == '__main__':
    sys.exit(main())
