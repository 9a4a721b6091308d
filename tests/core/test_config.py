from __future__ import annotations

import pytest

from flashquiz.core import config as core_config
from flashquiz.core.config import TomlConfigError


def test_load_toml_reads_tables(tmp_path) -> None:
    path = tmp_path / "settings.toml"
    path.write_text("[quiz]\nshuffle = true\n", encoding="utf-8")

    assert core_config.load_toml(path) == {"quiz": {"shuffle": True}}


def test_load_toml_errors(tmp_path) -> None:
    with pytest.raises(TomlConfigError, match="not found"):
        core_config.load_toml(tmp_path / "missing.toml")

    broken = tmp_path / "broken.toml"
    broken.write_text("[quiz\n", encoding="utf-8")
    with pytest.raises(TomlConfigError, match="Failed to parse"):
        core_config.load_toml(broken)


def test_merge_defaults_overrides_nested_values() -> None:
    base = {"quiz": {"shuffle": False, "duration": 0}, "logging": {}}

    core_config.merge_defaults(base, {"quiz": {"duration": 10}})

    assert base == {"quiz": {"shuffle": False, "duration": 10}, "logging": {}}


def test_merge_defaults_rejects_unknown_and_mismatched_keys() -> None:
    with pytest.raises(TomlConfigError, match="'quiz.extra'"):
        core_config.merge_defaults({"quiz": {}}, {"quiz": {"extra": 1}})
    with pytest.raises(TomlConfigError, match="Expected table for 'quiz'"):
        core_config.merge_defaults({"quiz": {}}, {"quiz": 3})


def test_write_toml_template_refuses_to_clobber(tmp_path) -> None:
    target = tmp_path / "deep" / "flashquiz.toml"

    core_config.write_toml_template(target, template="a = 1\n")
    assert target.read_text(encoding="utf-8") == "a = 1\n"
    assert target.stat().st_mode & 0o777 == 0o600

    with pytest.raises(TomlConfigError, match="already exists"):
        core_config.write_toml_template(target, template="a = 2\n")

    core_config.write_toml_template(target, template="a = 2\n", overwrite=True)
    assert target.read_text(encoding="utf-8") == "a = 2\n"
