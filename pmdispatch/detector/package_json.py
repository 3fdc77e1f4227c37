"""package.json reader.

Only two keys are ever consulted: `packageManager` for detection and
`scripts` for the interactive script picker.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pmdispatch.detector.types import PackageManagerSpec

logger = logging.getLogger(__name__)


class ManifestParseError(Exception):
    """Raised when package.json exists but is not valid JSON."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"Failed to parse {path}: {message}")


def read_package_json(path: Path) -> Optional[dict]:
    """Load package.json. Returns None when missing or not a JSON object."""
    if not path.is_file():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ManifestParseError(path, str(exc)) from exc

    return data if isinstance(data, dict) else None


def parse_package_manager(value: str) -> PackageManagerSpec:
    """Split a `packageManager` value like "^yarn@3.2.0" into name and version."""
    name, _, version = value.removeprefix("^").partition("@")
    return PackageManagerSpec(name=name, version=version or None)


def get_package_manager(path: Path) -> Optional[PackageManagerSpec]:
    """Return the `packageManager` field of the manifest, if it is a string."""
    data = read_package_json(path)
    if data is None:
        return None
    field = data.get("packageManager")
    if not isinstance(field, str):
        return None
    return parse_package_manager(field)


def get_scripts(path: Path) -> dict[str, str]:
    """Return the string-valued entries of `scripts`."""
    try:
        data = read_package_json(path)
    except ManifestParseError as exc:
        logger.warning("%s", exc)
        return {}
    if data is None:
        return {}
    scripts = data.get("scripts", {})
    if not isinstance(scripts, dict):
        return {}
    return {name: cmd for name, cmd in scripts.items() if isinstance(cmd, str)}
