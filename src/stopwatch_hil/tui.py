from __future__ import annotations

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.widgets import Footer, Header, Static

from .export import renderLaps
from .shared import StopwatchError, formatDuration
from .stopwatch import Stopwatch

class StopwatchApp(App):
    BINDINGS = [
        Binding("space", "toggle", "Start/Stop"),
        Binding("l", "lap", "Lap"),
        Binding("r", "reset", "Reset"),
        Binding("q", "quit", "Quit"),
    ]
    DEFAULT_CSS = '''
    #elapsed {
        content-align: center middle;
        height: 3;
        text-style: bold;
    }
    '''

    elapsed_text: reactive[str] = reactive(formatDuration(0), init=False)

    def __init__(
        self, sw: Stopwatch | None = None, refresh_interval: float = 0.1,
    ) -> None:
        super().__init__()

        self.sw = Stopwatch() if sw is None else sw
        self.refresh_interval = refresh_interval
        self.title = "Stopwatch"

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        yield Static(formatDuration(0), id="elapsed")
        with VerticalScroll():
            yield Static(renderLaps(()), id="laps")
        yield Footer()

    def on_mount(self) -> None:
        self.set_interval(self.refresh_interval, self.updateElapsed)
        self.updateElapsed()

    def updateElapsed(self) -> None:
        self.elapsed_text = formatDuration(self.sw.elapsed())

    def watch_elapsed_text(self, _, new_text: str) -> None:
        try:
            elapsed = self.query_one("#elapsed", Static)
        except NoMatches:  # before compose
            return
        elapsed.update(new_text)

    def updateLaps(self) -> None:
        self.query_one("#laps", Static).update(renderLaps(self.sw.laps))

    def action_toggle(self) -> None:
        if self.sw.running:
            self.sw.stop()
        else:
            self.sw.start()
        self.updateElapsed()

    def action_lap(self) -> None:
        try:
            self.sw.lap()
        except StopwatchError as e:
            self.notify(f'{e.kind.value}: start the stopwatch first.', severity='warning')
            return
        self.updateLaps()

    def action_reset(self) -> None:
        self.sw.reset()
        self.updateElapsed()
        self.updateLaps()
