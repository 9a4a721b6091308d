from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.timer import Timer
from textual.widgets import Static

from ..router import Router
from ..screens import Event, KeyPress, Resize, ScreenCommand, ScreenId, Tick

BLINK_INTERVAL = 0.53


class FlashQuizApp(App):
    """Textual shell around a :class:`Router`.

    Every key press is forwarded to the router and the active screen is
    repainted into a single ``Static`` afterwards.
    """

    CSS_PATH = None
    CSS = """
#screen { padding: 1 2; }
"""
    BINDINGS = [
        Binding("ctrl+c", "quit_quiz", "Quit", show=False, priority=True),
    ]

    def __init__(self, router: Router):
        super().__init__()
        self.router = router
        self._blink_timer: Optional[Timer] = None
        self._blink_owner: Optional[ScreenId] = None

    def compose(self) -> ComposeResult:
        yield Static("", id="screen")

    def on_mount(self) -> None:
        self.apply_command(self.router.start())
        self.refresh_screen()

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        self.send(KeyPress(event.key, event.character))

    def on_resize(self, event: events.Resize) -> None:
        self.send(Resize(event.size.width, event.size.height))

    def action_quit_quiz(self) -> None:
        self.send(KeyPress("ctrl+c"))

    def send(self, event: Event) -> None:
        """Dispatch a core event and repaint the active screen."""
        self.apply_command(self.router.dispatch(event))
        self.refresh_screen()

    def apply_command(self, command: Optional[ScreenCommand]) -> None:
        if command is None:
            return
        if command.type == "quit":
            self.exit()
        elif command.type == "blink":
            self._blink_owner = self.router.active_id
            if self._blink_timer is None:
                self._blink_timer = self.set_interval(
                    BLINK_INTERVAL, self._blink
                )
            else:
                self._blink_timer.reset()
                self._blink_timer.resume()

    def refresh_screen(self) -> None:
        try:
            body = self.query_one("#screen", Static)
        except Exception:
            return
        body.update(self.router.render())

    def _blink(self) -> None:
        # Screens that did not ask for a blink get no ticks.
        if self.router.active_id != self._blink_owner:
            if self._blink_timer is not None:
                self._blink_timer.pause()
            return
        self.send(Tick())
