"""Process execution for rendered commands.

Commands run with inherited stdin/stdout/stderr in the requested working
directory; the exit code is handed back to the CLI unchanged.
"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import Optional

from pmdispatch.agents.catalog import Agent

logger = logging.getLogger(__name__)


class ExecutionError(Exception):
    """Raised when a command cannot be started at all."""

    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(f"Failed to run '{command}': {message}")


def split_command(command: str) -> list[str]:
    """Split a rendered command into argv.

    Only double quotes group words, matching how arguments are quoted when the
    command is rendered, so a lone apostrophe (`don't-care`) stays literal.
    Raises ValueError on an unterminated double quote.
    """
    lexer = shlex.shlex(command, posix=True)
    lexer.whitespace_split = True
    lexer.quotes = '"'
    lexer.commenters = ""
    return list(lexer)


def execute_command(command: str, cwd: Path) -> int:
    """Run command with inherited standard streams. Returns the exit code."""
    logger.info("Running: %s (cwd=%s)", command, cwd)
    try:
        argv = split_command(command)
    except ValueError as exc:
        raise ExecutionError(command, str(exc)) from exc

    try:
        completed = subprocess.run(argv, cwd=str(cwd))
    except (FileNotFoundError, PermissionError) as exc:
        raise ExecutionError(command, str(exc)) from exc
    return completed.returncode


def capture_command(command: str, cwd: Optional[Path] = None) -> Optional[str]:
    """Run command and return its stripped stdout, or None if it failed."""
    try:
        completed = subprocess.run(
            split_command(command),
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
        )
    except (ValueError, FileNotFoundError, PermissionError) as exc:
        logger.debug("Could not run %s: %s", command, exc)
        return None

    if completed.returncode != 0:
        logger.debug("%s exited with %d", command, completed.returncode)
        return None
    return completed.stdout.strip()


def install_agent_globally(agent: Agent, version: Optional[str], cwd: Path) -> int:
    """Install a missing agent through npm, pinning the declared version if any."""
    package = agent.executable
    if version:
        package = f"{package}@{version}"
    return execute_command(f"npm i -g {package}", cwd)
