"""Small helpers shared by the command and CLI layers."""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

CLI_TEMP_DIR = Path(tempfile.gettempdir()) / "pmdispatch"


def exclude(args: list[str], value: str) -> list[str]:
    """Return a copy of args with every occurrence of value removed."""
    return [arg for arg in args if arg != value]


def remove(args: list[str], value: str) -> list[str]:
    """Remove the first occurrence of value in place."""
    if value in args:
        args.remove(value)
    return args


def cmd_exists(cmd: str) -> bool:
    return shutil.which(cmd) is not None


def get_volta_prefix() -> Optional[str]:
    """Prefix commands with `volta run` when Volta manages the toolchain."""
    if os.environ.get("VOLTA_HOME") and cmd_exists("volta"):
        return "volta run"
    return None


def write_file_safe(path: Path, data: str) -> bool:
    """Write data to path, creating parents. Returns False when unchanged."""
    if path.exists() and path.read_text(encoding="utf-8") == data:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(data, encoding="utf-8")
    return True
