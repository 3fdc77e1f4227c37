"""Detector orchestrator: decides which agent governs a directory.

Detection flow:
1. Walk up from cwd for the nearest lockfile (LOCKS order breaks ties).
2. Pick the manifest: package.json beside the lockfile, else the nearest
   package.json found walking up.
3. A `packageManager` field in the manifest takes priority:
     yarn  with major > 1  -> yarn@berry
     pnpm  with major < 7  -> pnpm@6
     any other known agent -> that agent
     unknown names are ignored (warned about unless programmatic)
   A malformed manifest is skipped.
4. Otherwise fall back to the lockfile's agent.
5. Flag needs_install when the agent's executable is not on PATH.

Detection never prompts or spawns processes; remediation is the caller's job.
"""

import logging
from pathlib import Path
from typing import Optional

from pmdispatch.agents.catalog import Agent, is_agent
from pmdispatch.agents.locks import LOCKS
from pmdispatch.detector.lockfile import find_lockfile, find_up
from pmdispatch.detector.package_json import ManifestParseError, get_package_manager
from pmdispatch.detector.types import BERRY_VERSION, DetectionResult, PackageManagerSpec
from pmdispatch.utils import cmd_exists

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def detect(cwd: Optional[Path] = None, *, programmatic: bool = False) -> DetectionResult:
    """Run agent detection for ``cwd`` (defaults to the process cwd)."""
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    result = DetectionResult()

    lock_path = find_lockfile(cwd)
    if lock_path is not None:
        result.lock_path = lock_path
        manifest_path: Optional[Path] = lock_path.parent / MANIFEST_NAME
    else:
        manifest_path = find_up([MANIFEST_NAME], cwd)

    if manifest_path is not None and manifest_path.is_file():
        result.manifest_path = manifest_path
        _apply_manifest(result, manifest_path, programmatic)

    if result.agent is None and lock_path is not None:
        result.agent = LOCKS[lock_path.name]
        result.source = f"lock file: {lock_path.name}"

    if result.agent is not None and not cmd_exists(result.agent.executable):
        result.needs_install = True

    logger.debug("Detection for %s: %s", cwd, result.to_dict())
    return result


# ---------------------------------------------------------------------------
# Manifest helpers
# ---------------------------------------------------------------------------

def _apply_manifest(result: DetectionResult, manifest_path: Path, programmatic: bool) -> None:
    try:
        spec = get_package_manager(manifest_path)
    except ManifestParseError as exc:
        logger.debug("Ignoring manifest: %s", exc)
        return

    if spec is None:
        return

    agent = resolve_package_manager(spec)
    if agent is None:
        if not programmatic:
            logger.warning("Unknown packageManager: %s@%s", spec.name, spec.version or "")
        return

    result.agent = agent
    result.version = BERRY_VERSION if agent == Agent.YARN_BERRY else spec.version
    result.source = f"{MANIFEST_NAME} packageManager field"


def resolve_package_manager(spec: PackageManagerSpec) -> Optional[Agent]:
    """Map a `packageManager` declaration onto an agent, or None if unknown."""
    major = spec.major

    if spec.name == "yarn" and major is not None and major > 1:
        return Agent.YARN_BERRY
    if spec.name == "pnpm" and major is not None and major < 7:
        return Agent.PNPM_V6
    if is_agent(spec.name):
        return Agent(spec.name)
    return None
