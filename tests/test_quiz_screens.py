from __future__ import annotations

from rich.console import Console

from flashquiz.quiz.report import CORRECT_MARK
from flashquiz.quiz.screens import (
    BLINK,
    QUIT,
    EditScreen,
    KeyPress,
    MenuScreen,
    QuizScreen,
    Resize,
    ScreenId,
    Tick,
    switch_to,
)
from flashquiz.quiz.session import QuizSession
from flashquiz.quiz.source import QuestionPair


def render_text(screen) -> str:
    console = Console(record=True, width=80, force_terminal=True)
    console.print(screen.render())
    return console.export_text()


def type_text(screen: QuizScreen, text: str) -> None:
    for char in text:
        screen.handle_event(KeyPress(char, char))


def make_quiz(*pairs: tuple[str, str]) -> QuizScreen:
    screen = QuizScreen(QuizSession([QuestionPair(q, a) for q, a in pairs]))
    assert screen.initialize() == BLINK
    return screen


def test_menu_cursor_moves_and_clamps() -> None:
    menu = MenuScreen()

    menu.handle_event(KeyPress("up"))
    assert menu.cursor == 0
    menu.handle_event(KeyPress("j"))
    menu.handle_event(KeyPress("down"))
    menu.handle_event(KeyPress("down"))
    assert menu.cursor == len(MenuScreen.ITEMS) - 1
    menu.handle_event(KeyPress("k"))
    assert menu.cursor == 1


def test_menu_enter_maps_items_to_commands() -> None:
    menu = MenuScreen()
    assert menu.handle_event(KeyPress("enter")) == switch_to(ScreenId.QUIZ)

    menu.cursor = 1
    assert menu.handle_event(KeyPress("enter")) == switch_to(ScreenId.EDIT)

    menu.cursor = 2
    assert menu.handle_event(KeyPress("enter")) == QUIT


def test_menu_ctrl_c_quits_and_resize_is_recorded() -> None:
    menu = MenuScreen()

    assert menu.handle_event(KeyPress("ctrl+c")) == QUIT
    assert menu.handle_event(Resize(100, 40)) is None
    assert menu.width == 100
    assert menu.handle_event(Tick()) is None


def test_menu_render_marks_selection() -> None:
    menu = MenuScreen()
    menu.handle_event(KeyPress("down"))

    text = render_text(menu)

    assert "What's the plan?" in text
    assert "> 2. Edit Questions" in text
    assert "  1. Run Quiz" in text


def test_quiz_typing_and_backspace_edit_the_buffer() -> None:
    screen = make_quiz(("2+2?", "4"))

    type_text(screen, "45")
    screen.handle_event(KeyPress("backspace"))

    assert screen.buffer == "4"
    assert "> 4" in render_text(screen)


def test_quiz_ignores_non_printable_keys() -> None:
    screen = make_quiz(("q", "a"))

    screen.handle_event(KeyPress("tab", "\t"))
    screen.handle_event(KeyPress("left"))

    assert screen.buffer == ""


def test_quiz_enter_submits_and_clears_the_buffer() -> None:
    screen = make_quiz(("2+2?", "4"), ("3+3?", "6"))

    type_text(screen, "4")
    assert screen.handle_event(KeyPress("enter")) is None

    assert screen.buffer == ""
    assert screen.session.asked_count == 1
    assert screen.session.correct_count == 1
    assert "3+3?" in render_text(screen)


def test_quiz_placeholder_and_progress_render() -> None:
    screen = make_quiz(("Capital of France?", "Paris"), ("1+1", "2"))

    text = render_text(screen)

    assert "Capital of France?" in text
    assert QuizScreen.PLACEHOLDER in text
    assert "Question 1/2" in text


def test_quiz_tick_toggles_cursor_while_active() -> None:
    screen = make_quiz(("q", "a"))

    screen.handle_event(Tick())
    assert screen.cursor_visible is False
    screen.handle_event(Tick())
    assert screen.cursor_visible is True


def test_quiz_finished_shows_score_card() -> None:
    screen = make_quiz(("2+2?", "4"))

    type_text(screen, "4")
    screen.handle_event(KeyPress("enter"))
    text = render_text(screen)

    assert screen.session.finished
    assert f"4 {CORRECT_MARK}" in text
    assert "1/1 (100%)" in text
    assert "Enter to restart" in text


def test_quiz_finished_ignores_typing_and_restarts_on_enter() -> None:
    screen = make_quiz(("q", "a"))
    screen.handle_event(KeyPress("enter"))

    type_text(screen, "zz")
    assert screen.buffer == ""

    assert screen.handle_event(KeyPress("enter")) == BLINK
    assert screen.session.asked_count == 0
    assert not screen.session.is_over


def test_quiz_escape_returns_to_menu_and_ctrl_c_quits() -> None:
    screen = make_quiz(("q", "a"))

    assert screen.handle_event(KeyPress("escape")) == switch_to(ScreenId.MENU)
    assert screen.handle_event(KeyPress("ctrl+c")) == QUIT


def test_quiz_initialize_resets_progress() -> None:
    screen = make_quiz(("q1", "a1"), ("q2", "a2"))
    type_text(screen, "a1")
    screen.handle_event(KeyPress("enter"))
    type_text(screen, "half")

    screen.initialize()

    assert screen.session.asked_count == 0
    assert screen.buffer == ""


def test_edit_screen_returns_to_menu() -> None:
    screen = EditScreen()

    assert screen.initialize() is None
    assert screen.handle_event(KeyPress("escape")) == switch_to(ScreenId.MENU)
    assert screen.handle_event(KeyPress("enter")) == switch_to(ScreenId.MENU)
    assert screen.handle_event(KeyPress("x", "x")) is None
    assert screen.handle_event(KeyPress("ctrl+c")) == QUIT
    assert EditScreen.MESSAGE in render_text(screen)


def test_menu_render_fits_resized_width() -> None:
    menu = MenuScreen()
    assert "enter select" in render_text(menu)

    menu.handle_event(Resize(14, 10))
    text = render_text(menu)

    assert "enter select" not in text
    assert "…" in text
    assert all(len(line) <= 14 for line in text.splitlines())
    assert "  What's the …" in text
