from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from fixtures import WorkspaceBuilder  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep FLASHQUIZ_* settings from the host out of every test."""

    for key in list(os.environ):
        if key.startswith("FLASHQUIZ_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("FLASHQUIZ_HOME", str(tmp_path / "flashquiz-home"))


@pytest.fixture
def workspace(tmp_path: Path) -> WorkspaceBuilder:
    """Provide a helper bound to pytest's per-test tmp directory."""

    return WorkspaceBuilder(tmp_path)
