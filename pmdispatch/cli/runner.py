"""CLI runner shared by every entry point.

Flow for one invocation:
1. Strip the `?` debug sign (print the command instead of running it).
2. Honour a leading `-C <dir>` to change the working directory.
3. Answer `-v` / `--version` and `-h` / `--help` directly.
4. Resolve the agent: global agent for `-g`, otherwise detection, then the
   configured default, then an interactive pick.
5. Offer to install a detected-but-missing agent (interactive only).
6. Render the command through the intent runner and execute it.

Interactive mode reports problems on the console and exits non-zero;
programmatic mode never prints or prompts and raises instead.
"""

import logging
import sys
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError
from rich.console import Console

from pmdispatch.agents.catalog import INSTALL_PAGE, Agent, Verb, is_agent, selectable_agents
from pmdispatch.cli import prompts
from pmdispatch.cli.executor import ExecutionError, capture_command, execute_command, install_agent_globally
from pmdispatch.command.intents import Runner
from pmdispatch.command.templater import UnsupportedCommand, get_command
from pmdispatch.core.config import PROMPT
from pmdispatch.core.context import ConfigResolver, RunnerContext, is_ci
from pmdispatch.core.logging import configure_structlog
from pmdispatch.detector.orchestrator import detect
from pmdispatch.detector.types import DetectionResult
from pmdispatch.utils import get_volta_prefix, remove

logger = logging.getLogger(__name__)

DEBUG_SIGN = "?"

console = Console()


class AgentInstallDeclined(SystemExit):
    """Exit raised when a missing agent cannot or will not be installed."""

    def __init__(self) -> None:
        super().__init__(1)


def run_cli(
    fn: Runner,
    args: Optional[Sequence[str]] = None,
    *,
    programmatic: bool = False,
    auto_install: bool = False,
    cwd: Optional[Path] = None,
    resolver: Optional[ConfigResolver] = None,
) -> Optional[int]:
    """Entry-point wrapper around run(). Returns the command's exit code."""
    args = list(args) if args is not None else [arg for arg in sys.argv[1:] if arg]
    resolver = resolver or ConfigResolver()

    try:
        configure_structlog(debug=resolver.get_settings().debug)
        code = run(
            fn,
            args,
            resolver,
            programmatic=programmatic,
            auto_install=auto_install,
            cwd=cwd,
        )
    except (UnsupportedCommand, ExecutionError, ValidationError) as exc:
        if programmatic:
            raise
        console.print(f"✗ {exc}", style="red", markup=False, highlight=False)
        sys.exit(1)

    if code and not programmatic:
        sys.exit(code)
    return code


def run(
    fn: Runner,
    args: list[str],
    resolver: Optional[ConfigResolver] = None,
    *,
    programmatic: bool = False,
    auto_install: bool = False,
    cwd: Optional[Path] = None,
) -> Optional[int]:
    args = list(args)
    debug = DEBUG_SIGN in args
    if debug:
        remove(args, DEBUG_SIGN)

    cwd = Path(cwd) if cwd is not None else Path.cwd()
    if len(args) >= 2 and args[0] == "-C":
        cwd = (cwd / args[1]).resolve()
        del args[:2]

    resolver = resolver or ConfigResolver(cwd)

    if len(args) == 1 and (args[0].lower() == "-v" or args[0] == "--version"):
        print_versions(resolver, cwd)
        return 0

    if len(args) == 1 and args[0] in ("-h", "--help"):
        print_help()
        return 0

    command = get_cli_command(
        fn,
        args,
        resolver,
        programmatic=programmatic,
        auto_install=auto_install,
        cwd=cwd,
    )
    if not command:
        return None

    volta_prefix = get_volta_prefix()
    if volta_prefix:
        command = f"{volta_prefix} {command}"

    if debug:
        console.print(command, markup=False, highlight=False, soft_wrap=True)
        return 0

    return execute_command(command, cwd)


def get_cli_command(
    fn: Runner,
    args: list[str],
    resolver: ConfigResolver,
    *,
    programmatic: bool = False,
    auto_install: bool = False,
    cwd: Optional[Path] = None,
) -> Optional[str]:
    """Resolve the agent for this invocation and render the command."""
    cwd = Path(cwd) if cwd is not None else Path.cwd()

    if "-g" in args:
        return fn(resolver.get_global_agent(), args, None)

    detection = detect(cwd, programmatic=programmatic)
    if detection.agent is not None and detection.needs_install:
        ensure_agent_installed(detection, cwd, programmatic=programmatic, auto_install=auto_install)

    agent = detection.agent or resolver.get_default_agent(programmatic)
    if agent == PROMPT:
        picked = prompts.select("Choose the agent", [a.value for a in selectable_agents()])
        if picked is None:
            return None
        agent = Agent(picked)

    ctx = RunnerContext(programmatic=programmatic, has_lock=detection.has_lock, cwd=cwd)
    return fn(agent, args, ctx)


def ensure_agent_installed(
    detection: DetectionResult,
    cwd: Path,
    *,
    programmatic: bool = False,
    auto_install: bool = False,
) -> None:
    """Remediate a detected agent whose executable is missing.

    Programmatic callers get no remediation. CI aborts. Interactive users are
    asked first unless auto_install is set.
    """
    agent = detection.agent
    if programmatic or agent is None:
        return

    if not auto_install:
        console.print(
            f"[ni] Detected {agent} but it doesn't seem to be installed.\n",
            style="yellow",
            markup=False,
        )
        if is_ci():
            raise AgentInstallDeclined()

        link = f"[link={INSTALL_PAGE[agent]}]{agent}[/link]"
        if not prompts.confirm(f"Would you like to globally install {link}?"):
            raise AgentInstallDeclined()

    code = install_agent_globally(agent, detection.version, cwd)
    if code != 0:
        logger.error("Installing %s exited with %d", agent, code)
        raise AgentInstallDeclined()


# ---------------------------------------------------------------------------
# Banners
# ---------------------------------------------------------------------------

def _own_version() -> str:
    try:
        return package_version("pmdispatch")
    except PackageNotFoundError:
        return "unknown"


def _tool_version(tool: str, cwd: Optional[Path] = None) -> str:
    command = get_command(tool, Verb.AGENT, ["-v"]) if is_agent(tool) else f"{tool} -v"
    output = capture_command(command, cwd)
    if not output:
        return "unknown"
    return output if output.startswith("v") else f"v{output}"


def print_versions(resolver: ConfigResolver, cwd: Path) -> None:
    global_agent = resolver.get_global_agent()
    agent = detect(cwd, programmatic=True).agent

    console.print(f"{'pmdispatch':<10} [cyan]v{_own_version()}[/cyan]", highlight=False)
    console.print(f"{'node':<10} [green]{_tool_version('node', cwd)}[/green]", highlight=False)
    if agent is not None:
        console.print(f"{agent.value:<10} [blue]{_tool_version(agent, cwd)}[/blue]", highlight=False)
    else:
        console.print(f"{'agent':<10} no lock file", highlight=False)
    console.print(
        f"{global_agent.value + ' -g':<10} [blue]{_tool_version(global_agent)}[/blue]",
        highlight=False,
    )


def print_help() -> None:
    dash = "[dim]-[/dim]"
    console.print(f"[bold green]pmdispatch[/bold green][dim] use the right package manager v{_own_version()}\n[/dim]")
    for name, description in (
        ("ni", "install"),
        ("nr", "run"),
        ("nlx", "execute"),
        ("nu", "upgrade"),
        ("nun", "uninstall"),
        ("nci", "clean install"),
        ("na", "agent alias"),
        ("ni -v", "show used agent"),
    ):
        console.print(f"{name:<5} {dash}  {description}", highlight=False)
    console.print("\n[yellow]Append ? to print the command instead of running it.[/yellow]")
