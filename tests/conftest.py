"""Shared fixtures.

Every test runs with an isolated rc file location and without CI / NI_* /
Volta variables leaking in from the developer's shell.
"""

import logging

import pytest
import structlog

from pmdispatch.core.logging import CliLogHandler


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("NI_CONFIG_FILE", str(tmp_path / "nirc-not-created"))
    for var in ("CI", "NI_DEFAULT_AGENT", "NI_GLOBAL_AGENT", "NI_DEBUG", "VOLTA_HOME"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the stderr handler a test installed; its stream is per-test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in [h for h in root.handlers if isinstance(h, CliLogHandler)]:
        root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def tmp_repo(tmp_path):
    """An empty project directory, separate from the rc-file location."""
    repo = tmp_path / "repo"
    repo.mkdir()
    return repo
