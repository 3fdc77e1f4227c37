"""Shared types for the detector module.

detect() returns a DetectionResult carrying the resolved agent along with
the evidence it was derived from and a remediation signal for the CLI.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pmdispatch.agents.catalog import Agent

# Version recorded for yarn 2+: packageManager's version is not the berry package version.
BERRY_VERSION = "berry"


@dataclass
class PackageManagerSpec:
    """A parsed `packageManager` field, e.g. "pnpm@8.6.0"."""

    name: str
    version: Optional[str] = None

    @property
    def major(self) -> Optional[int]:
        """Leading integer of the version, or None when it is not numeric."""
        if not self.version:
            return None
        digits = ""
        for ch in self.version.strip():
            if not ch.isdigit():
                break
            digits += ch
        return int(digits) if digits else None


@dataclass
class DetectionResult:
    """Detection output for a working directory.

    agent is None when neither a manifest nor a lockfile identified one.
    needs_install is set when the agent was detected but its executable is
    not on PATH; the CLI decides whether to offer an install.
    """

    agent: Optional[Agent] = None
    version: Optional[str] = None
    lock_path: Optional[Path] = None
    manifest_path: Optional[Path] = None
    source: Optional[str] = None
    needs_install: bool = False

    @property
    def has_lock(self) -> bool:
        return self.lock_path is not None

    def to_dict(self) -> dict:
        return {
            "agent": self.agent.value if self.agent else None,
            "version": self.version,
            "lock_path": str(self.lock_path) if self.lock_path else None,
            "manifest_path": str(self.manifest_path) if self.manifest_path else None,
            "source": self.source,
            "needs_install": self.needs_install,
        }
