"""Score card for a completed (or timed out) quiz session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from .session import QuizSession, normalize_answer

CORRECT_MARK = "✅"
WRONG_MARK = "❌"
NO_ANSWERS = "No questions were answered."


@dataclass(frozen=True)
class ReportLine:
    question: str
    given: str
    expected: str
    is_correct: bool

    def answer_text(self) -> str:
        if self.is_correct:
            return f"{self.given} {CORRECT_MARK}"
        given = self.given or "(no answer)"
        return f"{given} {WRONG_MARK} ({self.expected})"


@dataclass(frozen=True)
class QuizReport:
    lines: List[ReportLine]
    correct: int
    asked: int
    total: int
    timed_out: bool = False

    def summary(self) -> str:
        if self.asked == 0:
            return NO_ANSWERS
        return format_summary(self.correct, self.asked)


def score_percentage(correct: int, asked: int) -> int:
    """Return ``floor(correct / asked * 100)`` using integer arithmetic."""
    if asked <= 0:
        raise ValueError("Cannot compute a score without any asked questions.")
    return correct * 100 // asked


def format_summary(correct: int, asked: int) -> str:
    return f"{correct}/{asked} ({score_percentage(correct, asked)}%)"


def build_report(session: QuizSession) -> QuizReport:
    if not session.is_over:
        raise ValueError("The session is still in progress.")
    lines = [
        ReportLine(
            question=pair.question,
            given=given,
            expected=pair.answer,
            is_correct=given == normalize_answer(pair.answer),
        )
        for pair, given in zip(session.pairs, session.user_answers)
    ]
    return QuizReport(
        lines=lines,
        correct=session.correct_count,
        asked=session.asked_count,
        total=session.total,
        timed_out=session.timed_out,
    )


def format_report(report: QuizReport) -> str:
    """Plain-text score card, one question/answer block per pair."""
    blocks = [
        f"{line.question}\n{line.answer_text()}" for line in report.lines
    ]
    blocks.append(f"Your score was: {report.summary()}")
    return "\n\n".join(blocks)


def render_report(
    report: QuizReport,
    *,
    help_text: str | None = None,
) -> RenderableType:
    """Rich version of :func:`format_report` used by both front ends."""
    parts: List[RenderableType] = [
        Text(" Score Card ", style="bold #FAFAFA on #7D56F4"),
        Text(""),
    ]
    for line in report.lines:
        parts.append(Text(line.question, style="bold"))
        answer = Text(line.answer_text())
        if line.is_correct:
            answer.stylize("bold", 0, len(line.given))
        parts.append(answer)
        parts.append(Text(""))
    if report.timed_out:
        unanswered = report.total - report.asked
        parts.append(
            Text(f"{unanswered} question(s) left unanswered.", style="dim")
        )
    parts.append(
        Panel(
            Text(f"Your score was: {report.summary()}"),
            box=box.HORIZONTALS,
            border_style="#626262",
            expand=False,
        )
    )
    if help_text:
        parts.append(Text(help_text, style="#626262"))
    return Group(*parts)
