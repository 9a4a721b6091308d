"""Line-mode quiz: print ``question=``, read an answer, repeat.

This is the simple front end. It reads answers from a blocking input
provider (``input`` by default) and can race an optional one-shot
:class:`Countdown` against the player.
"""

from __future__ import annotations

import _thread
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Literal, Optional, Sequence

from rich.console import Console
from rich.text import Text

from .report import QuizReport, build_report, render_report
from .session import QuizSession
from .source import QuestionPair

logger = logging.getLogger(__name__)

InputProvider = Callable[[], str]
ExitAction = Literal["completed", "timed_out", "quit"]

# Upper bound for waiting on an interrupt the countdown already sent.
INTERRUPT_GRACE = 0.5


class Countdown:
    """Fire-once timer that interrupts the main thread's blocking read.

    The timer thread only flips an event and calls ``on_expire``; the main
    thread owns the session and does the actual expiry. Firing after
    :meth:`finish` (or a second time) does nothing; both take the same lock
    so an interrupt is never sent once :meth:`finish` has returned.
    """

    def __init__(
        self,
        seconds: float,
        *,
        on_expire: Callable[[], None] = _thread.interrupt_main,
    ) -> None:
        if seconds <= 0:
            raise ValueError("Countdown duration must be positive.")
        self.seconds = seconds
        self._on_expire = on_expire
        self._fired = threading.Event()
        self._done = threading.Event()
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None

    @property
    def expired(self) -> bool:
        return self._fired.is_set()

    def start(self) -> None:
        if self._timer is not None:
            raise RuntimeError("Countdown already started.")
        self._timer = threading.Timer(self.seconds, self.fire)
        self._timer.daemon = True
        self._timer.start()

    def finish(self) -> bool:
        """Stop the countdown; return True if it had already fired."""
        with self._lock:
            self._done.set()
            return self._fired.is_set()

    def fire(self) -> None:
        with self._lock:
            if self._done.is_set() or self._fired.is_set():
                return
            self._fired.set()
            self._on_expire()


@dataclass(frozen=True)
class DrillResult:
    exit_action: ExitAction
    report: Optional[QuizReport] = None


def run_drill(
    pairs: Sequence[QuestionPair],
    console: Console,
    input_provider: Optional[InputProvider] = None,
    *,
    countdown: Optional[Countdown] = None,
) -> DrillResult:
    """Ask every pair in order and print the score card at the end.

    Raises :class:`~flashquiz.quiz.session.EmptyQuestionSetError` before
    anything is printed when ``pairs`` is empty.
    """

    session = QuizSession(pairs)
    read = input_provider if input_provider is not None else input

    if countdown is not None:
        console.print(
            f"\n\nYou have {countdown.seconds:g}s to answer all questions "
            "- press enter to begin\n"
        )
        try:
            read()
        except (EOFError, KeyboardInterrupt):
            return _interrupted(console)
        countdown.start()
        logger.debug(
            "Countdown started", extra={"seconds": countdown.seconds}
        )

    exit_action: ExitAction = "completed"
    try:
        while not session.is_over:
            console.print(Text(f"{session.current.question}="), end="")
            try:
                raw = read()
            except EOFError:
                exit_action = "quit"
                break
            session.submit_answer(raw)
        if countdown is not None and countdown.finish():
            # Fired while the loop was wrapping up; let its interrupt land
            # here rather than in the report.
            time.sleep(INTERRUPT_GRACE)
    except KeyboardInterrupt:
        if session.finished:
            exit_action = "completed"
        elif (
            exit_action != "quit"
            and countdown is not None
            and countdown.expired
        ):
            session.expire()
            exit_action = "timed_out"
        else:
            exit_action = "quit"
    finally:
        if countdown is not None:
            countdown.finish()

    if exit_action == "quit":
        return _interrupted(console)

    if exit_action == "timed_out":
        console.print("\n\n[bold red]Time's up!!![/]")
    elif countdown is not None:
        console.print(
            "\n\n[bold green]Well done - you answered all questions in the "
            "allowed time!!![/]"
        )

    report = build_report(session)
    console.print()
    console.print(render_report(report))
    logger.info(
        "Drill finished",
        extra={
            "exit_action": exit_action,
            "correct": report.correct,
            "asked": report.asked,
            "total": report.total,
        },
    )
    return DrillResult(exit_action, report)


def _interrupted(console: Console) -> DrillResult:
    console.print("\n[bold yellow]Session interrupted.[/]")
    return DrillResult("quit")
