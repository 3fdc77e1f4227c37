"""Intent resolvers: one per CLI verb.

Each resolver takes (agent, args, ctx) and returns the rendered command.
Arguments are copied before flags are stripped; the caller's list is never
mutated.

  parse_ni   install / add / frozen / global install
  parse_nr   run a package.json script
  parse_nu   upgrade (optionally interactive)
  parse_nun  uninstall (optionally global)
  parse_nlx  execute a package binary
  parse_na   pass straight through to the agent's own CLI
"""

from typing import Callable, Optional

from pmdispatch.agents.catalog import Agent, Verb
from pmdispatch.command.templater import get_command
from pmdispatch.core.context import RunnerContext
from pmdispatch.utils import exclude

Runner = Callable[[str, list[str], Optional[RunnerContext]], Optional[str]]


def _normalize(agent: str, args: list[str]) -> list[str]:
    # bun uses `-d` instead of `-D` for dev dependencies
    if agent == Agent.BUN:
        return ["-d" if arg == "-D" else arg for arg in args]
    return list(args)


def parse_ni(agent: str, args: list[str], ctx: Optional[RunnerContext] = None) -> str:
    args = _normalize(agent, args)

    if "-g" in args:
        return get_command(agent, Verb.GLOBAL, exclude(args, "-g"))

    if "--frozen-if-present" in args:
        args = exclude(args, "--frozen-if-present")
        has_lock = ctx.has_lock if ctx is not None else False
        return get_command(agent, Verb.FROZEN if has_lock else Verb.INSTALL, args)

    if "--frozen" in args:
        return get_command(agent, Verb.FROZEN, exclude(args, "--frozen"))

    if not args or all(arg.startswith("-") for arg in args):
        return get_command(agent, Verb.INSTALL, args)

    return get_command(agent, Verb.ADD, args)


def parse_nr(agent: str, args: list[str], ctx: Optional[RunnerContext] = None) -> str:
    args = _normalize(agent, args)

    if_present = "--if-present" in args
    if if_present:
        args = exclude(args, "--if-present")

    if not args:
        args.append("start")

    if if_present:
        args[0] = f"--if-present {args[0]}"

    return get_command(agent, Verb.RUN, args)


def parse_nu(agent: str, args: list[str], ctx: Optional[RunnerContext] = None) -> str:
    args = _normalize(agent, args)
    if "-i" in args:
        return get_command(agent, Verb.UPGRADE_INTERACTIVE, exclude(args, "-i"))
    return get_command(agent, Verb.UPGRADE, args)


def parse_nun(agent: str, args: list[str], ctx: Optional[RunnerContext] = None) -> str:
    args = _normalize(agent, args)
    if "-g" in args:
        return get_command(agent, Verb.GLOBAL_UNINSTALL, exclude(args, "-g"))
    return get_command(agent, Verb.UNINSTALL, args)


def parse_nlx(agent: str, args: list[str], ctx: Optional[RunnerContext] = None) -> str:
    return get_command(agent, Verb.EXECUTE, _normalize(agent, args))


def parse_na(agent: str, args: list[str], ctx: Optional[RunnerContext] = None) -> str:
    return get_command(agent, Verb.AGENT, _normalize(agent, args))
