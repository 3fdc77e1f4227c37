"""Per-agent command templates.

Every agent maps every Verb to either a LiteralTemplate (a string with a
single ``{0}`` placeholder), a ComputedTemplate (a procedure over the raw
argument list), or None when the agent has no equivalent command.

Derived agents are composed explicitly from their base table:
  yarn@berry  <- yarn  (immutable installs, `up`, `dlx`, npm for globals)
  pnpm@6      <- pnpm  (script name passed positionally to `run`)
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Callable, Optional, Union


class Agent(StrEnum):
    """Package managers the dispatcher knows how to drive."""

    NPM = "npm"
    YARN = "yarn"
    YARN_BERRY = "yarn@berry"
    PNPM = "pnpm"
    PNPM_V6 = "pnpm@6"
    BUN = "bun"

    @property
    def executable(self) -> str:
        """Binary name on PATH (the part before any ``@`` qualifier)."""
        return self.value.split("@")[0]


class Verb(StrEnum):
    """Abstract user intents, independent of any agent's CLI syntax."""

    AGENT = "agent"
    RUN = "run"
    INSTALL = "install"
    FROZEN = "frozen"
    GLOBAL = "global"
    ADD = "add"
    UPGRADE = "upgrade"
    UPGRADE_INTERACTIVE = "upgrade-interactive"
    EXECUTE = "execute"
    UNINSTALL = "uninstall"
    GLOBAL_UNINSTALL = "global_uninstall"


@dataclass(frozen=True)
class LiteralTemplate:
    text: str

    def render(self, joined_args: str) -> str:
        return self.text.replace("{0}", joined_args).strip()


@dataclass(frozen=True)
class ComputedTemplate:
    """A template that owns its own formatting of the argument list."""

    procedure: Callable[[list[str]], str]

    def render(self, args: list[str]) -> str:
        return self.procedure(args)


CommandTemplate = Union[LiteralTemplate, ComputedTemplate]
AgentTable = dict[Verb, Optional[CommandTemplate]]


class UnknownAgentError(ValueError):
    """Raised for an agent outside the catalog. Callers pass validated agents only."""

    def __init__(self, agent: str):
        self.agent = agent
        super().__init__(f'Unsupported agent "{agent}"')


def npm_run(executable: str) -> ComputedTemplate:
    """`run` for agents that need `--` before script arguments."""

    def _render(args: list[str]) -> str:
        if len(args) > 1:
            return f"{executable} run {args[0]} -- {' '.join(args[1:])}"
        return f"{executable} run {args[0]}"

    return ComputedTemplate(_render)


def _literal(table: dict[Verb, Optional[str]]) -> AgentTable:
    return {
        verb: LiteralTemplate(text) if text is not None else None
        for verb, text in table.items()
    }


_NPM: AgentTable = {
    **_literal({
        Verb.AGENT: "npm {0}",
        Verb.INSTALL: "npm i {0}",
        Verb.FROZEN: "npm ci",
        Verb.GLOBAL: "npm i -g {0}",
        Verb.ADD: "npm i {0}",
        Verb.UPGRADE: "npm update {0}",
        Verb.UPGRADE_INTERACTIVE: None,
        Verb.EXECUTE: "npx {0}",
        Verb.UNINSTALL: "npm uninstall {0}",
        Verb.GLOBAL_UNINSTALL: "npm uninstall -g {0}",
    }),
    Verb.RUN: npm_run("npm"),
}

_YARN: AgentTable = _literal({
    Verb.AGENT: "yarn {0}",
    Verb.RUN: "yarn run {0}",
    Verb.INSTALL: "yarn install {0}",
    Verb.FROZEN: "yarn install --frozen-lockfile",
    Verb.GLOBAL: "yarn global add {0}",
    Verb.ADD: "yarn add {0}",
    Verb.UPGRADE: "yarn upgrade {0}",
    Verb.UPGRADE_INTERACTIVE: "yarn upgrade-interactive {0}",
    Verb.EXECUTE: "npx {0}",
    Verb.UNINSTALL: "yarn remove {0}",
    Verb.GLOBAL_UNINSTALL: "yarn global remove {0}",
})

# Yarn 2+ removed `global`, see https://github.com/yarnpkg/berry/issues/821
_YARN_BERRY: AgentTable = {
    **_YARN,
    **_literal({
        Verb.FROZEN: "yarn install --immutable",
        Verb.UPGRADE: "yarn up {0}",
        Verb.UPGRADE_INTERACTIVE: "yarn up -i {0}",
        Verb.EXECUTE: "yarn dlx {0}",
        Verb.GLOBAL: "npm i -g {0}",
        Verb.GLOBAL_UNINSTALL: "npm uninstall -g {0}",
    }),
}

_PNPM: AgentTable = _literal({
    Verb.AGENT: "pnpm {0}",
    Verb.RUN: "pnpm run {0}",
    Verb.INSTALL: "pnpm i {0}",
    Verb.FROZEN: "pnpm i --frozen-lockfile",
    Verb.GLOBAL: "pnpm add -g {0}",
    Verb.ADD: "pnpm add {0}",
    Verb.UPGRADE: "pnpm update {0}",
    Verb.UPGRADE_INTERACTIVE: "pnpm update -i {0}",
    Verb.EXECUTE: "pnpm dlx {0}",
    Verb.UNINSTALL: "pnpm remove {0}",
    Verb.GLOBAL_UNINSTALL: "pnpm remove --global {0}",
})

# pnpm v6.x or below
_PNPM_V6: AgentTable = {
    **_PNPM,
    Verb.RUN: npm_run("pnpm"),
}

# bun has no strict frozen-lockfile install; --no-save only skips writing the lockfile.
_BUN: AgentTable = _literal({
    Verb.AGENT: "bun {0}",
    Verb.RUN: "bun run {0}",
    Verb.INSTALL: "bun install {0}",
    Verb.FROZEN: "bun install --no-save",
    Verb.GLOBAL: "bun add -g {0}",
    Verb.ADD: "bun add {0}",
    Verb.UPGRADE: "bun update {0}",
    Verb.UPGRADE_INTERACTIVE: "bun update {0}",
    Verb.EXECUTE: "bunx {0}",
    Verb.UNINSTALL: "bun remove {0}",
    Verb.GLOBAL_UNINSTALL: "bun remove -g {0}",
})

AGENTS: dict[Agent, AgentTable] = {
    Agent.NPM: _NPM,
    Agent.YARN: _YARN,
    Agent.YARN_BERRY: _YARN_BERRY,
    Agent.PNPM: _PNPM,
    Agent.PNPM_V6: _PNPM_V6,
    Agent.BUN: _BUN,
}

INSTALL_PAGE: dict[Agent, str] = {
    Agent.BUN: "https://bun.sh",
    Agent.PNPM: "https://pnpm.io/installation",
    Agent.PNPM_V6: "https://pnpm.io/6.x/installation",
    Agent.YARN: "https://classic.yarnpkg.com/en/docs/install",
    Agent.YARN_BERRY: "https://yarnpkg.com/getting-started/install",
    Agent.NPM: "https://docs.npmjs.com/cli/v8/configuring-npm/install",
}


def _check_complete() -> None:
    for agent, table in AGENTS.items():
        missing = set(Verb) - set(table)
        if missing:
            raise RuntimeError(
                f"Agent {agent} is missing templates for: {', '.join(sorted(missing))}"
            )


_check_complete()


def template_for(agent: str, verb: Verb) -> Optional[CommandTemplate]:
    """Look up the template for (agent, verb). None means unsupported."""
    try:
        table = AGENTS[Agent(agent)]
    except ValueError:
        raise UnknownAgentError(agent) from None
    return table[verb]


def is_agent(name: str) -> bool:
    return name in {agent.value for agent in Agent}


def selectable_agents() -> list[Agent]:
    """Agents offered in the interactive picker (no version-qualified variants)."""
    return [agent for agent in Agent if "@" not in agent.value]
