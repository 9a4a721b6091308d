"""Configuration loader for the quiz commands."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from flashquiz.core import config as core_config
from flashquiz.core import workspace as workspace_mod

CONFIG_FILENAME = "flashquiz.toml"
CONFIG_ENV = "FLASHQUIZ_CONFIG"
ENV_PREFIX = "FLASHQUIZ_"

_DEFAULT_LOG_LEVEL = "INFO"
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class QuizConfigError(RuntimeError):
    """Raised when configuration parsing or validation fails."""


@dataclass(frozen=True)
class QuizConfig:
    """Fully resolved options for a quiz run."""

    source: Optional[Path]
    shuffle: bool
    duration: Optional[int]
    log_level: str


@dataclass(frozen=True)
class ConfigOverrides:
    """CLI-sourced overrides applied on top of file/env options."""

    source: Optional[Path] = None
    shuffle: Optional[bool] = None
    duration: Optional[int] = None
    log_level: Optional[str] = None


@dataclass(frozen=True)
class LoadResult:
    config: QuizConfig
    layout: workspace_mod.WorkspaceLayout
    config_path: Optional[Path]


def load_config(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[ConfigOverrides] = None,
    env: Optional[Mapping[str, str]] = None,
    workspace_path: Optional[Path] = None,
) -> LoadResult:
    """Load configuration applying precedence CLI > env > TOML defaults."""

    overrides = overrides or ConfigOverrides()
    env_map = os.environ if env is None else env

    try:
        layout = workspace_mod.ensure_workspace(
            env=env_map, path=workspace_path
        )
    except workspace_mod.WorkspaceError as exc:
        raise QuizConfigError(str(exc)) from exc
    requested_path = _resolve_config_path(
        config_path=config_path,
        env_map=env_map,
        default_path=layout.path_for("config") / CONFIG_FILENAME,
    )

    options = _default_table()
    loaded_path: Optional[Path] = None
    if requested_path.exists():
        loaded_path = requested_path
        try:
            parsed = core_config.load_toml(requested_path)
            core_config.merge_defaults(options, parsed)
        except core_config.TomlConfigError as exc:
            raise QuizConfigError(str(exc)) from exc
    elif config_path is not None or (env_map.get(CONFIG_ENV) or "").strip():
        raise QuizConfigError(f"Config file not found: {requested_path}")

    source = _pick_first(
        overrides.source,
        _env_path(env_map, "SOURCE"),
        _coerce_source(options["quiz"]["source"]),
    )
    shuffle = _pick_first(
        overrides.shuffle,
        _env_bool(env_map, "SHUFFLE"),
        _coerce_bool(options["quiz"]["shuffle"], "quiz.shuffle"),
    )
    duration = _resolve_duration(
        _pick_first(
            overrides.duration,
            _env_int(env_map, "DURATION"),
            options["quiz"]["duration"],
        )
    )
    log_level = _resolve_log_level(
        _pick_first(
            overrides.log_level,
            _env_string(env_map, "LOG_LEVEL"),
            options["logging"]["level"],
        )
    )

    config = QuizConfig(
        source=source,
        shuffle=bool(shuffle),
        duration=duration,
        log_level=log_level,
    )
    return LoadResult(config=config, layout=layout, config_path=loaded_path)


def _default_table() -> MutableMapping[str, MutableMapping[str, object]]:
    return {
        "quiz": {"source": "", "shuffle": False, "duration": 0},
        "logging": {"level": _DEFAULT_LOG_LEVEL},
    }


def _resolve_config_path(
    *,
    config_path: Optional[Path],
    env_map: Mapping[str, str],
    default_path: Path,
) -> Path:
    if config_path is not None:
        return config_path.expanduser()
    env_candidate = (env_map.get(CONFIG_ENV) or "").strip()
    if env_candidate:
        return Path(env_candidate).expanduser()
    return default_path


def _pick_first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _coerce_source(value: object) -> Optional[Path]:
    if not isinstance(value, str):
        raise QuizConfigError("quiz.source must be a string.")
    raw = value.strip()
    return Path(raw).expanduser() if raw else None


def _coerce_bool(value: object, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise QuizConfigError(f"{key} must be true or false.")


def _resolve_duration(value: object) -> Optional[int]:
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise QuizConfigError("quiz.duration must be an integer.")
    if value < 0:
        raise QuizConfigError("quiz.duration must be zero or positive.")
    return value or None


def _resolve_log_level(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise QuizConfigError("logging.level must be a non-empty string.")
    return value.strip().upper()


def _env_string(env_map: Mapping[str, str], suffix: str) -> Optional[str]:
    raw = env_map.get(f"{ENV_PREFIX}{suffix}")
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def _env_path(env_map: Mapping[str, str], suffix: str) -> Optional[Path]:
    raw = _env_string(env_map, suffix)
    return Path(raw).expanduser() if raw else None


def _env_bool(env_map: Mapping[str, str], suffix: str) -> Optional[bool]:
    raw = _env_string(env_map, suffix)
    if raw is None:
        return None
    lowered = raw.lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise QuizConfigError(
        f"{ENV_PREFIX}{suffix} must be a boolean (true/false), got '{raw}'."
    )


def _env_int(env_map: Mapping[str, str], suffix: str) -> Optional[int]:
    raw = _env_string(env_map, suffix)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise QuizConfigError(
            f"{ENV_PREFIX}{suffix} must be an integer, got '{raw}'."
        ) from exc
