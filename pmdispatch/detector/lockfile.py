"""Upward filesystem search for lockfiles and manifests."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from pmdispatch.agents.locks import LOCKS

logger = logging.getLogger(__name__)


def find_up(names: Iterable[str], cwd: Optional[Path] = None) -> Optional[Path]:
    """Return the nearest file named any of ``names``, walking up to the root.

    Within a single directory, names are tried in the given order.
    """
    names = list(names)
    start = Path(cwd or Path.cwd()).resolve()

    for directory in (start, *start.parents):
        for name in names:
            candidate = directory / name
            if candidate.is_file():
                logger.debug("Found %s at %s", name, candidate)
                return candidate
    return None


def find_lockfile(cwd: Optional[Path] = None) -> Optional[Path]:
    """Nearest lockfile, with LOCKS order deciding ties inside a directory."""
    return find_up(LOCKS.keys(), cwd)
