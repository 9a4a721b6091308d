"""Route events to whichever screen is active."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from rich.console import RenderableType

from .screens import (
    EditScreen,
    Event,
    KeyPress,
    MenuScreen,
    QuizScreen,
    Screen,
    ScreenCommand,
    ScreenId,
)
from .session import QuizSession

logger = logging.getLogger(__name__)

NEXT_KEY = "ctrl+right"
PREVIOUS_KEY = "ctrl+left"


class Router:
    """Owns every screen for the lifetime of the app.

    Exactly one screen is active. ``dispatch`` hands an event to it and
    interprets ``switch`` commands itself; other commands (``quit``,
    ``blink``) are returned for the application shell to act on.
    """

    def __init__(
        self,
        screens: Sequence[Tuple[ScreenId, Screen]],
        *,
        initial: Optional[ScreenId] = None,
    ) -> None:
        if not screens:
            raise ValueError("Router needs at least one screen.")
        self._order: List[ScreenId] = [sid for sid, _ in screens]
        self._screens: Dict[ScreenId, Screen] = dict(screens)
        if len(self._screens) != len(self._order):
            raise ValueError("Screen ids must be unique.")
        self.active_id = initial if initial is not None else self._order[0]
        if self.active_id not in self._screens:
            raise KeyError(f"Unknown screen: {self.active_id!r}")

    @property
    def active(self) -> Screen:
        return self._screens[self.active_id]

    @property
    def order(self) -> Tuple[ScreenId, ...]:
        return tuple(self._order)

    def screen(self, screen_id: ScreenId) -> Screen:
        try:
            return self._screens[screen_id]
        except KeyError as exc:
            raise KeyError(f"Unknown screen: {screen_id!r}") from exc

    def start(self) -> Optional[ScreenCommand]:
        """Run the enter hook of the initial screen."""
        return self.active.initialize()

    def select(self, screen_id: ScreenId) -> Optional[ScreenCommand]:
        screen = self.screen(screen_id)
        logger.debug(
            "Switching screen",
            extra={"from": self.active_id.value, "to": screen_id.value},
        )
        self.active_id = screen_id
        return self._follow(screen.initialize())

    def next(self) -> Optional[ScreenCommand]:
        idx = self._order.index(self.active_id)
        return self.select(self._order[(idx + 1) % len(self._order)])

    def previous(self) -> Optional[ScreenCommand]:
        idx = self._order.index(self.active_id)
        return self.select(self._order[(idx - 1) % len(self._order)])

    def dispatch(self, event: Event) -> Optional[ScreenCommand]:
        if isinstance(event, KeyPress):
            if event.key == NEXT_KEY:
                return self.next()
            if event.key == PREVIOUS_KEY:
                return self.previous()
        return self._follow(self.active.handle_event(event))

    def render(self) -> RenderableType:
        return self.active.render()

    def _follow(
        self, command: Optional[ScreenCommand]
    ) -> Optional[ScreenCommand]:
        if command is not None and command.type == "switch":
            if command.target is None:
                raise ValueError("Switch command without a target screen.")
            return self.select(command.target)
        return command


def build_router(session: QuizSession, *, reshuffle: bool = False) -> Router:
    """Menu, quiz and edit screens in menu order, starting on the menu."""
    return Router(
        [
            (ScreenId.MENU, MenuScreen()),
            (ScreenId.QUIZ, QuizScreen(session, reshuffle=reshuffle)),
            (ScreenId.EDIT, EditScreen()),
        ]
    )
