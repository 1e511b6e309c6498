"""
Shared fixtures for the worktime tests.
"""

import time
from pathlib import Path

import pytest

from worktime.workfile import Workfile


@pytest.fixture(autouse=True)
def utc_local_time(monkeypatch):
    """Render local times in UTC so expected strings do not depend on the host."""
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def workfile_path(tmp_path: Path) -> Path:
    return tmp_path / ".workfile"


@pytest.fixture
def make_workfile(workfile_path: Path):
    """Create a workfile with the given content and return a fresh Workfile for it."""

    def _make(content: str) -> Workfile:
        workfile_path.write_text(content, encoding="utf-8")
        return Workfile(workfile_path)

    return _make


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the handler changes made by setup_logging() in CLI tests."""
    import logging

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def home(tmp_path: Path, monkeypatch) -> Path:
    """A temporary home directory, also used as the working directory."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    return home
