"""Shared testing helpers for the flashquiz test suite."""

from .workspace import WorkspaceBuilder, pairs_json, pairs_csv  # noqa: F401

__all__ = [
    "WorkspaceBuilder",
    "pairs_csv",
    "pairs_json",
]
