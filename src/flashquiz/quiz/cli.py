"""CLI entry points for the quiz front ends."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Sequence

from dotenv import load_dotenv
from rich.console import Console

from flashquiz.core import config_templates
from flashquiz.core import workspace as workspace_mod
from flashquiz.core.config_templates import ConfigTemplateError
from flashquiz.core.logging import configure_logger
from flashquiz.core.workspace import WorkspaceError

from .config import (
    CONFIG_FILENAME,
    ConfigOverrides,
    LoadResult,
    QuizConfigError,
    load_config,
)
from .drill import Countdown, run_drill
from .router import build_router
from .session import EmptyQuestionSetError, QuizSession
from .shuffle import shuffle_pairs
from .source import QuestionPair, QuestionSourceError, load_question_source

PLAY_DEFAULT_SOURCE = Path("cards.json")
DRILL_DEFAULT_SOURCE = Path("problems.csv")

EXIT_INTERRUPTED = 130


def _build_parser(
    prog: str,
    description: str,
    *,
    timed: bool,
    mirror_logs: bool = True,
) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument(
        "-f",
        "--file",
        dest="source",
        type=Path,
        help="Question file to load (.json or .csv).",
    )
    parser.add_argument(
        "-s",
        "--shuffle",
        action="store_true",
        default=None,
        help="Shuffle the questions before playing.",
    )
    if timed:
        parser.add_argument(
            "-d",
            "--duration",
            type=int,
            help=(
                "Time limit in seconds for the whole drill. Without it (or "
                "with 0) the drill is untimed; a timed drill exits with "
                "status 1 once the results are shown."
            ),
        )
    parser.add_argument(
        "--config",
        type=Path,
        help=(
            "Path to a TOML config file (defaults to the workspace config "
            "directory)."
        ),
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        help="Override the workspace root used for config and logs.",
    )
    parser.add_argument(
        "--log-level",
        help="Set the logging level for the run (defaults to INFO).",
    )
    if mirror_logs:
        verbose_help = "Mirror log output to stderr."
    else:
        verbose_help = (
            "Write DEBUG records to the log file. Nothing is mirrored to "
            "stderr while the quiz owns the terminal."
        )
    parser.add_argument("--verbose", action="store_true", help=verbose_help)
    return parser


def _load_settings(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> LoadResult:
    load_dotenv()
    overrides = ConfigOverrides(
        source=args.source,
        shuffle=args.shuffle,
        duration=getattr(args, "duration", None),
        log_level=args.log_level,
    )
    try:
        return load_config(
            config_path=args.config,
            overrides=overrides,
            workspace_path=args.workspace,
        )
    except QuizConfigError as exc:
        parser.error(str(exc))


def _fail(logger: logging.Logger, source: Path, exc: Exception) -> int:
    logger.error(
        "Cannot start quiz",
        extra={
            "source": str(source),
            "error_type": type(exc).__name__,
            "error": str(exc),
        },
    )
    sys.stderr.write(f"Error: {exc}\n")
    return 1


def _load_pairs(
    source: Path, *, shuffle: bool, logger: logging.Logger
) -> List[QuestionPair]:
    pairs = load_question_source(source)
    if shuffle:
        seed = shuffle_pairs(pairs)
        logger.info("Shuffled questions", extra={"seed": seed})
    logger.info(
        "Loaded questions",
        extra={"source": str(source), "pairs": len(pairs)},
    )
    return pairs


def play_main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser(
        "flashquiz play",
        "Run the interactive quiz with a menu, typed answers and a score "
        "card.",
        timed=False,
        mirror_logs=False,
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    settings = _load_settings(parser, args)
    config = settings.config

    logger, _ = configure_logger(
        "flashquiz.quiz",
        log_dir=settings.layout.path_for("logs"),
        level="DEBUG" if args.verbose else config.log_level,
    )
    source = config.source or PLAY_DEFAULT_SOURCE
    try:
        pairs = _load_pairs(source, shuffle=config.shuffle, logger=logger)
        session = QuizSession(pairs)
    except (QuestionSourceError, EmptyQuestionSetError) as exc:
        return _fail(logger, source, exc)

    # Imported lazily so drill and config commands do not pay for Textual.
    from .view.app import FlashQuizApp

    logger.info("Starting interactive quiz")
    FlashQuizApp(build_router(session, reshuffle=config.shuffle)).run()
    return 0


def drill_main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser(
        "flashquiz drill",
        "Answer questions line by line, optionally against the clock.",
        timed=True,
    )
    args = parser.parse_args(list(argv) if argv is not None else None)
    if args.duration is not None and args.duration < 0:
        parser.error("--duration must be zero or positive.")
    settings = _load_settings(parser, args)
    config = settings.config

    logger, _ = configure_logger(
        "flashquiz.quiz",
        log_dir=settings.layout.path_for("logs"),
        level=config.log_level,
        verbose=args.verbose,
    )
    source = config.source or DRILL_DEFAULT_SOURCE
    countdown = Countdown(config.duration) if config.duration else None
    try:
        pairs = _load_pairs(source, shuffle=config.shuffle, logger=logger)
        logger.info(
            "Starting drill",
            extra={"duration": config.duration or 0},
        )
        result = run_drill(pairs, Console(), countdown=countdown)
    except (QuestionSourceError, EmptyQuestionSetError) as exc:
        return _fail(logger, source, exc)

    if result.exit_action == "quit":
        return EXIT_INTERRUPTED
    # Timed runs always end with status 1 once the results are shown.
    return 1 if countdown is not None else 0


def _build_config_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flashquiz config",
        description="Manage the flashquiz configuration file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    init_parser = subparsers.add_parser(
        "init",
        help=f"Write the default {CONFIG_FILENAME} template.",
    )
    init_parser.add_argument(
        "--path",
        type=Path,
        help=(
            "Destination for the config TOML (defaults to the workspace "
            "config directory)."
        ),
    )
    init_parser.add_argument(
        "--workspace",
        type=Path,
        help="Workspace root override used to resolve the default path.",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite the destination if a config already exists.",
    )
    return parser


def config_main(argv: Sequence[str] | None = None) -> int:
    parser = _build_config_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        target = _resolve_config_target(args)
    except WorkspaceError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    template = config_templates.get_template("quiz")
    try:
        written = template.write(target, overwrite=args.force)
    except ConfigTemplateError as exc:
        sys.stderr.write(str(exc) + "\n")
        return 1

    sys.stdout.write(f"Wrote flashquiz config to {written}\n")
    return 0


def _resolve_config_target(args: argparse.Namespace) -> Path:
    if args.path is not None:
        candidate = args.path.expanduser()
        if not candidate.is_absolute():
            candidate = (Path.cwd() / candidate).resolve()
        return candidate
    layout = workspace_mod.ensure_workspace(path=args.workspace)
    return layout.path_for("config") / CONFIG_FILENAME
