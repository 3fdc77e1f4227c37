"""Render (agent, verb, args) into the final shell command string."""

import json
from typing import Iterable, Optional

from pmdispatch.agents.catalog import AGENTS, Agent, ComputedTemplate, LiteralTemplate, Verb, template_for


class UnsupportedCommand(Exception):
    """Raised when an agent has no template for the requested verb.

    Carries both identifiers so the CLI can report which pair failed.
    """

    def __init__(self, agent: str, verb: Verb):
        self.agent = agent
        self.verb = verb
        super().__init__(f'Command "{verb}" is not support by agent "{agent}"')


def quote_arg(arg: str) -> str:
    """Double-quote args with spaces. `--` flags are assumed pre-escaped."""
    if not arg.startswith("--") and " " in arg:
        return json.dumps(arg, ensure_ascii=False)
    return arg


def get_command(agent: str, verb: Verb, args: Iterable[str] = ()) -> str:
    args = list(args)
    template = template_for(agent, verb)

    if isinstance(template, ComputedTemplate):
        return template.render(args)
    if template is None:
        raise UnsupportedCommand(agent, verb)

    return template.render(" ".join(quote_arg(arg) for arg in args))


def parse_verb(agent: str, command: str) -> Optional[Verb]:
    """Map a rendered command back to the verb that produced it.

    Picks the verb whose argument-free rendering is the longest token-prefix
    of ``command``. Agents with identical templates for several verbs (npm's
    install/add) resolve to the first such verb in declaration order.
    """
    tokens = command.split()
    best: Optional[Verb] = None
    best_len = -1

    for verb, template in AGENTS[Agent(agent)].items():
        if template is None:
            continue
        if isinstance(template, LiteralTemplate):
            prefix = template.render("").split()
        else:
            # computed run templates always emit `<exe> run <script>`
            prefix = template.render([""]).split()
        if tokens[: len(prefix)] == prefix and len(prefix) > best_len:
            best, best_len = verb, len(prefix)
    return best
