"""User settings loaded from the rc file and environment.

The rc file lives at $NI_CONFIG_FILE, falling back to ~/.nirc. It uses INI
syntax with top-level ``key=value`` lines:

    ; ~/.nirc
    defaultAgent=npm   # or "prompt" to ask every time
    globalAgent=npm

Source priority (highest first): init kwargs, NI_* environment variables,
the rc file, field defaults. The file is only ever read.
"""

import configparser
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from pmdispatch.agents.catalog import Agent, is_agent

logger = logging.getLogger(__name__)

PROMPT = "prompt"

# rc files use the camelCase keys of the original tool
RC_KEYS: dict[str, str] = {
    "defaultAgent": "default_agent",
    "globalAgent": "global_agent",
    "debug": "debug",
}


def rc_path() -> Path:
    custom = os.environ.get("NI_CONFIG_FILE")
    if custom:
        return Path(custom).expanduser()
    return Path.home() / ".nirc"


def read_rc_file(path: Path) -> dict[str, str]:
    """Parse an INI rc file into settings field names. Missing file -> {}."""
    if not path.is_file():
        return {}

    parser = configparser.ConfigParser(inline_comment_prefixes=("#", ";"), interpolation=None)
    parser.optionxform = str  # keep camelCase keys
    try:
        parser.read_string(f"[{configparser.DEFAULTSECT}]\n" + path.read_text(encoding="utf-8"))
    except (configparser.Error, UnicodeDecodeError) as exc:
        logger.error("Failed to parse %s: %s", path, exc)
        return {}

    values: dict[str, str] = {}
    for key, value in parser.defaults().items():
        field = RC_KEYS.get(key) or (key if key in RC_KEYS.values() else None)
        if field is None:
            logger.debug("Ignoring unknown rc key %r in %s", key, path)
            continue
        values[field] = value.strip().strip("\"'")
    return values


class RcFileSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the ~/.nirc file."""

    def __init__(self, settings_cls: type[BaseSettings]):
        super().__init__(settings_cls)
        self.path = rc_path()
        self._values = read_rc_file(self.path)

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return {
            name: value
            for name, value in self._values.items()
            if name in self.settings_cls.model_fields
        }


class Settings(BaseSettings):
    """Fallback agents used when detection finds nothing, or for -g commands."""

    model_config = SettingsConfigDict(
        env_prefix="NI_",
        case_sensitive=False,
    )

    default_agent: str = PROMPT
    global_agent: Agent = Agent.NPM
    debug: bool = False

    @field_validator("default_agent")
    @classmethod
    def validate_default_agent(cls, v: str) -> str:
        if v != PROMPT and not is_agent(v):
            raise ValueError(f"defaultAgent must be 'prompt' or one of: {', '.join(Agent)}")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, RcFileSettingsSource(settings_cls))


def get_settings() -> Settings:
    return Settings()
