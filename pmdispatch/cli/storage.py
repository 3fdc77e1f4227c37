"""Run history shared between `nr` invocations.

Stored as JSON under the system temp dir; only the last script name is kept
so `nr -` can repeat it.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pmdispatch.utils import CLI_TEMP_DIR, write_file_safe

logger = logging.getLogger(__name__)

STORAGE_PATH = CLI_TEMP_DIR / "_storage.json"


@dataclass
class Storage:
    last_run_command: Optional[str] = None

    def to_dict(self) -> dict:
        data = {}
        if self.last_run_command is not None:
            data["lastRunCommand"] = self.last_run_command
        return data


def load(path: Path = STORAGE_PATH) -> Storage:
    if not path.is_file():
        return Storage()
    try:
        data = json.loads(path.read_text(encoding="utf-8") or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Discarding unreadable run history %s: %s", path, exc)
        return Storage()

    last = data.get("lastRunCommand") if isinstance(data, dict) else None
    return Storage(last_run_command=last if isinstance(last, str) else None)


def dump(storage: Storage, path: Path = STORAGE_PATH) -> None:
    write_file_safe(path, json.dumps(storage.to_dict()))
