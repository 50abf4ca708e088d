"""Shared pytest fixtures for charguard tests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for key in (
        "CHARGUARD_MAX_FINDINGS",
        "CHARGUARD_MAX_FILE_SIZE",
        "CHARGUARD_EXCLUDE_DIRS",
        "CHARGUARD_ENCODING",
        "CHARGUARD_LOG_LEVEL",
        "CHARGUARD_LOG_FORMAT",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _drop_cli_log_handler():
    """CliRunner closes its stderr after invoke; drop the handler bound to it."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == "charguard":
            root.removeHandler(handler)


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[dict[str, bytes | str]], Path]:
    """Create files under tmp_path from a {relative_path: content} mapping."""

    def _make(files: dict[str, bytes | str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, str):
                path.write_bytes(content.encode("utf-8"))
            else:
                path.write_bytes(content)
        return tmp_path

    return _make

