"""Per-invocation context threaded from the entry point down to the intents.

RunnerContext holds the flags an intent may consult. ConfigResolver loads
settings and runs one programmatic detection, at most once per instance; the
entry point builds one resolver and passes it along instead of relying on a
module-level cache.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from pmdispatch.agents.catalog import Agent
from pmdispatch.core.config import PROMPT, Settings, get_settings
from pmdispatch.detector.orchestrator import detect

logger = logging.getLogger(__name__)


def is_ci() -> bool:
    return bool(os.environ.get("CI"))


@dataclass
class RunnerContext:
    programmatic: bool = False
    has_lock: bool = False
    cwd: Optional[Path] = None


class ConfigResolver:
    """Lazily resolves settings, overriding the default agent with detection."""

    def __init__(self, cwd: Optional[Path] = None, settings: Optional[Settings] = None):
        self.cwd = cwd
        self._settings = settings
        self._config: Optional[Settings] = None

    def get_settings(self) -> Settings:
        """Return the loaded settings without running detection."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def get_config(self) -> Settings:
        if self._config is None:
            config = self.get_settings()
            detected = detect(self.cwd, programmatic=True)
            if detected.agent is not None:
                config = config.model_copy(update={"default_agent": detected.agent.value})
            logger.debug(
                "Resolved config: default_agent=%s global_agent=%s",
                config.default_agent,
                config.global_agent,
            )
            self._config = config
        return self._config

    def get_default_agent(self, programmatic: bool = False) -> Union[Agent, str]:
        """Return the fallback agent, or "prompt" when the user should choose.

        Programmatic and CI callers never get "prompt"; they fall back to npm.
        """
        default_agent = self.get_config().default_agent
        if default_agent == PROMPT:
            if programmatic or is_ci():
                return Agent.NPM
            return PROMPT
        return Agent(default_agent)

    def get_global_agent(self) -> Agent:
        return self.get_config().global_agent
