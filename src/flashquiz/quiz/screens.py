"""Interactive screens: menu, quiz and the edit placeholder.

Screens never talk to the terminal directly. The application shell feeds
them events and paints whatever ``render`` returns; ``handle_event`` answers
with an optional :class:`ScreenCommand` describing what should happen next.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Optional, Protocol, Union

from rich.console import Group, RenderableType
from rich.text import Text

from .report import build_report, render_report
from .session import QuizSession

logger = logging.getLogger(__name__)

HELP_STYLE = "#626262"
SELECTED_STYLE = "color(170)"
CURSOR = "█"


class ScreenId(Enum):
    MENU = "menu"
    QUIZ = "quiz"
    EDIT = "edit"


@dataclass(frozen=True)
class KeyPress:
    """A key event; ``character`` is set for printable keys only."""

    key: str
    character: Optional[str] = None


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Tick:
    """Cursor blink interval elapsed."""


Event = Union[KeyPress, Resize, Tick]


@dataclass(frozen=True)
class ScreenCommand:
    """What the caller should do after an event was handled."""

    type: Literal["quit", "switch", "blink"]
    target: Optional[ScreenId] = None


QUIT = ScreenCommand("quit")
BLINK = ScreenCommand("blink")


def switch_to(target: ScreenId) -> ScreenCommand:
    return ScreenCommand("switch", target)


class Screen(Protocol):
    def initialize(self) -> Optional[ScreenCommand]: ...

    def handle_event(self, event: Event) -> Optional[ScreenCommand]: ...

    def render(self) -> RenderableType: ...


def _is_quit(event: Event) -> bool:
    return isinstance(event, KeyPress) and event.key == "ctrl+c"


class MenuScreen:
    TITLE = "What's the plan?"
    ITEMS = ("Run Quiz", "Edit Questions", "Quit")
    _ACTIONS = (
        switch_to(ScreenId.QUIZ),
        switch_to(ScreenId.EDIT),
        QUIT,
    )

    def __init__(self) -> None:
        self.cursor = 0
        self.width: Optional[int] = None

    def initialize(self) -> Optional[ScreenCommand]:
        return None

    def handle_event(self, event: Event) -> Optional[ScreenCommand]:
        if isinstance(event, Resize):
            self.width = event.width
            return None
        if not isinstance(event, KeyPress):
            return None
        if _is_quit(event):
            return QUIT
        if event.key in ("up", "k"):
            self.cursor = max(self.cursor - 1, 0)
        elif event.key in ("down", "j"):
            self.cursor = min(self.cursor + 1, len(self.ITEMS) - 1)
        elif event.key == "enter":
            return self._ACTIONS[self.cursor]
        return None

    def render(self) -> RenderableType:
        lines: List[Text] = [Text(f"  {self.TITLE}"), Text("")]
        for idx, label in enumerate(self.ITEMS):
            entry = f"{idx + 1}. {label}"
            if idx == self.cursor:
                lines.append(Text(f"  > {entry}", style=SELECTED_STYLE))
            else:
                lines.append(Text(f"    {entry}"))
        lines.append(Text(""))
        lines.append(
            Text("    ↑/k up • ↓/j down • enter select", style=HELP_STYLE)
        )
        if self.width:
            for line in lines:
                line.truncate(self.width, overflow="ellipsis")
        return Group(*lines)


class QuizScreen:
    """Typed-answer quiz over a :class:`QuizSession`.

    Entering the screen always starts the session over.
    """

    PLACEHOLDER = "..your answer"
    ACTIVE_HELP = "enter submit • esc main menu • ctrl+c quit"
    FINISHED_HELP = (
        "Press Ctrl+C to exit - Enter to restart - Escape for main menu"
    )

    def __init__(self, session: QuizSession, *, reshuffle: bool = False):
        self.session = session
        self.reshuffle = reshuffle
        self.buffer = ""
        self.cursor_visible = True

    def initialize(self) -> Optional[ScreenCommand]:
        self.session.restart(reshuffle=self.reshuffle)
        self.buffer = ""
        self.cursor_visible = True
        logger.debug(
            "Quiz screen entered", extra={"pairs": self.session.total}
        )
        return BLINK

    def handle_event(self, event: Event) -> Optional[ScreenCommand]:
        if isinstance(event, Tick):
            if not self.session.is_over:
                self.cursor_visible = not self.cursor_visible
            return None
        if not isinstance(event, KeyPress):
            return None
        if _is_quit(event):
            return QUIT
        if event.key == "escape":
            return switch_to(ScreenId.MENU)
        if self.session.is_over:
            if event.key == "enter":
                return self.initialize()
            return None
        if event.key == "enter":
            self.session.submit_answer(self.buffer)
            self.buffer = ""
            self.cursor_visible = True
            if self.session.finished:
                logger.info(
                    "Quiz finished",
                    extra={
                        "correct": self.session.correct_count,
                        "asked": self.session.asked_count,
                    },
                )
        elif event.key == "backspace":
            self.buffer = self.buffer[:-1]
        elif event.character and event.character.isprintable():
            self.buffer += event.character
        return None

    def render(self) -> RenderableType:
        if self.session.is_over:
            return render_report(
                build_report(self.session), help_text=self.FINISHED_HELP
            )
        cursor = CURSOR if self.cursor_visible else " "
        if self.buffer:
            entry = Text(f"> {self.buffer}{cursor}")
        else:
            entry = Text.assemble("> ", cursor, (self.PLACEHOLDER, "dim"))
        session = self.session
        progress = f"Question {session.current_index + 1}/{session.total}"
        return Group(
            Text(session.current.question, style="bold"),
            Text(""),
            entry,
            Text(""),
            Text(progress, style="dim"),
            Text(self.ACTIVE_HELP, style=HELP_STYLE),
        )


class EditScreen:
    """Placeholder until question editing exists."""

    MESSAGE = "Editing questions is not available yet."
    HELP = "Press Ctrl+C to exit - Escape/Return for main menu"

    def initialize(self) -> Optional[ScreenCommand]:
        return None

    def handle_event(self, event: Event) -> Optional[ScreenCommand]:
        if not isinstance(event, KeyPress):
            return None
        if _is_quit(event):
            return QUIT
        if event.key in ("escape", "enter"):
            return switch_to(ScreenId.MENU)
        return None

    def render(self) -> RenderableType:
        return Group(
            Text(self.MESSAGE), Text(""), Text(self.HELP, style=HELP_STYLE)
        )
