"""Quiz session state machine.

A session walks an ordered sequence of :class:`QuestionPair` items, one typed
answer per pair. It is either ``ACTIVE`` (waiting for the answer to the pair
at ``current_index``) or ``FINISHED`` (every pair answered). A countdown may
also cut an active session short; it is then over without being finished.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Sequence

from .shuffle import shuffle_pairs
from .source import QuestionPair

logger = logging.getLogger(__name__)

__all__ = [
    "EmptyQuestionSetError",
    "SessionStateError",
    "SessionState",
    "QuizSession",
    "normalize_answer",
]


class EmptyQuestionSetError(ValueError):
    """Raised when a session is requested for zero question pairs."""


class SessionStateError(RuntimeError):
    """Raised when an operation is not valid in the session's current state."""


class SessionState(Enum):
    ACTIVE = "active"
    FINISHED = "finished"


def normalize_answer(text: str) -> str:
    return text.strip().lower()


class QuizSession:
    """Mutable progress through one run of a question set."""

    def __init__(self, pairs: Sequence[QuestionPair]) -> None:
        if not pairs:
            raise EmptyQuestionSetError(
                "The question set is empty; add at least one question."
            )
        self._pairs = list(pairs)
        self._reset()

    def _reset(self) -> None:
        self.current_index = 0
        self.user_answers: list[str] = []
        self.correct_count = 0
        self.asked_count = 0
        self.finished = False
        self.timed_out = False

    @property
    def pairs(self) -> tuple[QuestionPair, ...]:
        return tuple(self._pairs)

    @property
    def total(self) -> int:
        return len(self._pairs)

    @property
    def state(self) -> SessionState:
        return SessionState.FINISHED if self.finished else SessionState.ACTIVE

    @property
    def is_over(self) -> bool:
        """True once no further answers are accepted."""
        return self.finished or self.timed_out

    @property
    def current(self) -> QuestionPair:
        if self.is_over:
            raise SessionStateError("The session has no current question.")
        return self._pairs[self.current_index]

    def submit_answer(self, text: str) -> bool:
        """Record ``text`` for the current pair and return whether it matched.

        Blank input is recorded and scored as a wrong answer.
        """
        pair = self.current
        given = normalize_answer(text)
        correct = given == normalize_answer(pair.answer)

        self.user_answers.append(given)
        self.asked_count += 1
        if correct:
            self.correct_count += 1

        if self.current_index + 1 == len(self._pairs):
            self.finished = True
            logger.debug(
                "Session finished",
                extra={
                    "correct": self.correct_count,
                    "asked": self.asked_count,
                },
            )
        else:
            self.current_index += 1
        return correct

    def restart(
        self, *, reshuffle: bool = False, seed: Optional[int] = None
    ) -> None:
        """Clear progress and go back to the first pair."""
        if reshuffle:
            used = shuffle_pairs(self._pairs, seed)
            logger.debug("Reshuffled question set", extra={"seed": used})
        self._reset()

    def expire(self) -> bool:
        """End an active session early; a no-op once the session is over."""
        if self.is_over:
            return False
        self.timed_out = True
        logger.debug(
            "Session timed out",
            extra={"asked": self.asked_count, "total": self.total},
        )
        return True
