"""Agent catalog: known package managers, their command templates and lockfiles.

Public API:
    template_for(agent, verb) -> CommandTemplate | None
"""

from pmdispatch.agents.catalog import (
    AGENTS,
    INSTALL_PAGE,
    Agent,
    CommandTemplate,
    ComputedTemplate,
    LiteralTemplate,
    UnknownAgentError,
    Verb,
    is_agent,
    selectable_agents,
    template_for,
)
from pmdispatch.agents.locks import LOCKS

__all__ = [
    "AGENTS",
    "INSTALL_PAGE",
    "LOCKS",
    "Agent",
    "CommandTemplate",
    "ComputedTemplate",
    "LiteralTemplate",
    "UnknownAgentError",
    "Verb",
    "is_agent",
    "selectable_agents",
    "template_for",
]
