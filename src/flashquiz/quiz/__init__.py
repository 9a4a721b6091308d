from .source import (
    QuestionPair,
    QuestionSourceError,
    SourceReadError,
    FormatError,
    ParseError,
    load_question_source,
)
from .shuffle import shuffle_pairs
from .session import (
    EmptyQuestionSetError,
    SessionStateError,
    SessionState,
    QuizSession,
)
from .report import (
    QuizReport,
    ReportLine,
    build_report,
    format_report,
    format_summary,
    render_report,
    score_percentage,
)
from .screens import (
    EditScreen,
    KeyPress,
    MenuScreen,
    QuizScreen,
    Resize,
    ScreenCommand,
    ScreenId,
    Tick,
)
from .router import Router, build_router
from .drill import Countdown, DrillResult, run_drill

__all__ = [
    "QuestionPair",
    "QuestionSourceError",
    "SourceReadError",
    "FormatError",
    "ParseError",
    "load_question_source",
    "shuffle_pairs",
    "EmptyQuestionSetError",
    "SessionStateError",
    "SessionState",
    "QuizSession",
    "QuizReport",
    "ReportLine",
    "build_report",
    "format_report",
    "format_summary",
    "render_report",
    "score_percentage",
    "EditScreen",
    "KeyPress",
    "MenuScreen",
    "QuizScreen",
    "Resize",
    "ScreenCommand",
    "ScreenId",
    "Tick",
    "Router",
    "build_router",
    "Countdown",
    "DrillResult",
    "run_drill",
]
