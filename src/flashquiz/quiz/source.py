"""Load question/answer pairs from CSV or JSON files.

CSV files hold one ``"question","answer"`` row per line with no header.
JSON files hold an array of ``{"question": ..., "answer": ...}`` objects.
The format is picked from the file suffix before anything is read.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

__all__ = [
    "QuestionPair",
    "QuestionSourceError",
    "SourceReadError",
    "FormatError",
    "ParseError",
    "SUPPORTED_SUFFIXES",
    "load_question_source",
    "parse_csv",
    "parse_json",
]


@dataclass(frozen=True)
class QuestionPair:
    """One question and its expected answer, exactly as loaded."""

    question: str
    answer: str


class QuestionSourceError(RuntimeError):
    """Base class for failures while loading a question file."""


class SourceReadError(QuestionSourceError):
    """The question file could not be read."""


class FormatError(QuestionSourceError):
    """The question file has an unsupported suffix."""


class ParseError(QuestionSourceError):
    """The question file content is malformed."""


def parse_csv(text: str) -> List[QuestionPair]:
    pairs: List[QuestionPair] = []
    reader = csv.reader(io.StringIO(text, newline=""))
    try:
        for row in reader:
            if not row:
                continue
            if len(row) != 2:
                raise ParseError(
                    f"line {reader.line_num}: expected 2 fields "
                    f"(question, answer), found {len(row)}"
                )
            pairs.append(QuestionPair(question=row[0], answer=row[1]))
    except csv.Error as exc:
        raise ParseError(f"line {reader.line_num}: {exc}") from exc
    return pairs


def parse_json(text: str) -> List[QuestionPair]:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(f"invalid JSON: {exc}") from exc
    if not isinstance(document, list):
        raise ParseError(
            "expected a JSON array of question objects, found "
            f"{type(document).__name__}"
        )
    pairs: List[QuestionPair] = []
    for idx, item in enumerate(document):
        if not isinstance(item, dict):
            raise ParseError(f"item {idx}: expected an object")
        question = item.get("question")
        answer = item.get("answer")
        if not isinstance(question, str) or not isinstance(answer, str):
            raise ParseError(
                f"item {idx}: 'question' and 'answer' must be strings"
            )
        pairs.append(QuestionPair(question=question, answer=answer))
    return pairs


_PARSERS: Dict[str, Callable[[str], List[QuestionPair]]] = {
    ".csv": parse_csv,
    ".json": parse_json,
}

SUPPORTED_SUFFIXES = tuple(_PARSERS)


def load_question_source(path: Path) -> List[QuestionPair]:
    """Read ``path`` and return its pairs in file order."""

    path = Path(path)
    parser = _PARSERS.get(path.suffix.lower())
    if parser is None:
        raise FormatError(
            f"Invalid input type for {path.name!r}, should be .csv or .json"
        )
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceReadError(f"Cannot read {path}: {exc}") from exc
    try:
        pairs = parser(text)
    except ParseError as exc:
        raise ParseError(f"{path}: {exc}") from exc
    logger.debug(
        "Loaded question source",
        extra={"path": str(path), "pairs": len(pairs)},
    )
    return pairs
