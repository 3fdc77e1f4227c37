"""Console-script entry points.

  ni   install / add        nu   upgrade
  nci  clean install        nun  uninstall
  nr   run a script         nlx  execute a package binary
  na   agent passthrough
"""

import logging
from pathlib import Path
from typing import Optional

from pmdispatch.cli import prompts, storage
from pmdispatch.cli.runner import console, run_cli
from pmdispatch.command.intents import Runner, parse_na, parse_ni, parse_nlx, parse_nr, parse_nu, parse_nun
from pmdispatch.core.context import RunnerContext
from pmdispatch.detector.package_json import get_scripts

logger = logging.getLogger(__name__)

# `nr -` repeats the previous script
LAST_RUN_SIGN = "-"


class NoLastCommand(Exception):
    def __init__(self) -> None:
        super().__init__("No last command found")


def parse_nci(agent: str, args: list[str], ctx: Optional[RunnerContext] = None) -> str:
    return parse_ni(agent, [*args, "--frozen-if-present"], ctx)


def make_nr_runner(storage_path: Path = storage.STORAGE_PATH) -> Runner:
    """parse_nr with run history and an interactive script picker."""

    def _runner(agent: str, args: list[str], ctx: Optional[RunnerContext] = None) -> Optional[str]:
        ctx = ctx or RunnerContext()
        args = list(args)
        history = storage.load(storage_path)

        if args[:1] == [LAST_RUN_SIGN]:
            if not history.last_run_command:
                if not ctx.programmatic:
                    console.print("No last command found", style="red", markup=False)
                    raise SystemExit(1)
                raise NoLastCommand()
            args[0] = history.last_run_command

        if not args and not ctx.programmatic and prompts.is_interactive():
            cwd = ctx.cwd or Path.cwd()
            scripts = get_scripts(cwd / "package.json")
            if not scripts:
                logger.info("No scripts found in %s", cwd / "package.json")
                return None
            choices = [f"{name}  ({cmd})" for name, cmd in scripts.items()]
            picked = prompts.select("Script to run", choices)
            if picked is None:
                return None
            args.append(list(scripts)[choices.index(picked)])

        if args and history.last_run_command != args[0]:
            history.last_run_command = args[0]
            storage.dump(history, storage_path)

        return parse_nr(agent, args, ctx)

    return _runner


def ni() -> None:
    run_cli(parse_ni)


def nci() -> None:
    run_cli(parse_nci, auto_install=True)


def nr() -> None:
    run_cli(make_nr_runner())


def nlx() -> None:
    run_cli(parse_nlx)


def nu() -> None:
    run_cli(parse_nu)


def nun() -> None:
    run_cli(parse_nun)


def na() -> None:
    run_cli(parse_na)
