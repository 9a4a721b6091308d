from __future__ import annotations

from pathlib import Path

import pytest

from flashquiz.quiz import config as quiz_config
from flashquiz.quiz.config import ConfigOverrides, QuizConfigError, load_config


def write_config(layout_home: Path, content: str) -> Path:
    path = layout_home / "config" / quiz_config.CONFIG_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults_without_config_file(tmp_path) -> None:
    result = load_config(env={}, workspace_path=tmp_path)

    assert result.config_path is None
    assert result.config.source is None
    assert result.config.shuffle is False
    assert result.config.duration is None
    assert result.config.log_level == "INFO"
    assert result.layout.home == tmp_path.resolve()


def test_workspace_config_file_is_loaded(tmp_path) -> None:
    path = write_config(
        tmp_path,
        "[quiz]\nsource = 'deck.csv'\nshuffle = true\nduration = 30\n"
        "[logging]\nlevel = 'debug'\n",
    )

    result = load_config(env={}, workspace_path=tmp_path)

    assert result.config_path == path
    assert result.config.source == Path("deck.csv")
    assert result.config.shuffle is True
    assert result.config.duration == 30
    assert result.config.log_level == "DEBUG"


def test_env_overrides_file(tmp_path) -> None:
    write_config(tmp_path, "[quiz]\nsource = 'file.json'\nduration = 30\n")
    env = {
        "FLASHQUIZ_SOURCE": "env.csv",
        "FLASHQUIZ_SHUFFLE": "yes",
        "FLASHQUIZ_DURATION": "0",
        "FLASHQUIZ_LOG_LEVEL": "warning",
    }

    config = load_config(env=env, workspace_path=tmp_path).config

    assert config.source == Path("env.csv")
    assert config.shuffle is True
    assert config.duration is None
    assert config.log_level == "WARNING"


def test_cli_overrides_env(tmp_path) -> None:
    env = {"FLASHQUIZ_SOURCE": "env.csv", "FLASHQUIZ_SHUFFLE": "on"}
    overrides = ConfigOverrides(
        source=Path("cli.json"), shuffle=False, duration=12
    )

    config = load_config(
        env=env, overrides=overrides, workspace_path=tmp_path
    ).config

    assert config.source == Path("cli.json")
    assert config.shuffle is False
    assert config.duration == 12


def test_explicit_config_path(tmp_path) -> None:
    custom = tmp_path / "custom.toml"
    custom.write_text("[quiz]\nshuffle = true\n", encoding="utf-8")

    result = load_config(
        config_path=custom, env={}, workspace_path=tmp_path / "ws"
    )

    assert result.config_path == custom
    assert result.config.shuffle is True


def test_config_env_variable_selects_file(tmp_path) -> None:
    custom = tmp_path / "from-env.toml"
    custom.write_text("[quiz]\nduration = 5\n", encoding="utf-8")

    result = load_config(
        env={quiz_config.CONFIG_ENV: str(custom)}, workspace_path=tmp_path
    )

    assert result.config.duration == 5


@pytest.mark.parametrize(
    "kwargs",
    [
        {"config_path": Path("does-not-exist.toml")},
        {"env": {"FLASHQUIZ_CONFIG": "missing.toml"}},
    ],
)
def test_missing_requested_config_is_an_error(tmp_path, kwargs) -> None:
    kwargs = {"env": {}, **kwargs}
    kwargs["workspace_path"] = tmp_path

    with pytest.raises(QuizConfigError) as excinfo:
        load_config(**kwargs)
    assert "Config file not found" in str(excinfo.value)


@pytest.mark.parametrize(
    "content",
    [
        "[quiz]\nunknown = 1\n",
        "[quiz\n",
        "quiz = 3\n",
        "[quiz]\nshuffle = 'maybe'\n",
        "[quiz]\nduration = -1\n",
        "[quiz]\nduration = true\n",
        "[quiz]\nsource = 5\n",
        "[logging]\nlevel = ''\n",
    ],
)
def test_invalid_file_values_are_rejected(tmp_path, content) -> None:
    write_config(tmp_path, content)

    with pytest.raises(QuizConfigError):
        load_config(env={}, workspace_path=tmp_path)


@pytest.mark.parametrize(
    "env",
    [
        {"FLASHQUIZ_SHUFFLE": "perhaps"},
        {"FLASHQUIZ_DURATION": "soon"},
        {"FLASHQUIZ_DURATION": "-4"},
    ],
)
def test_invalid_env_values_are_rejected(tmp_path, env) -> None:
    with pytest.raises(QuizConfigError):
        load_config(env=env, workspace_path=tmp_path)


def test_blank_env_values_are_ignored(tmp_path) -> None:
    env = {"FLASHQUIZ_SOURCE": "  ", "FLASHQUIZ_SHUFFLE": ""}

    config = load_config(env=env, workspace_path=tmp_path).config

    assert config.source is None
    assert config.shuffle is False


def test_workspace_errors_become_config_errors(tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(QuizConfigError):
        load_config(env={}, workspace_path=blocker)
