"""CLI glue: entry points, prompts, process execution and run history.

Public API:
    run_cli(fn, args=None, programmatic=False, ...) -> exit code
    get_cli_command(fn, args, resolver, ...) -> command string
"""


def run_cli(*args, **kwargs):
    from pmdispatch.cli.runner import run_cli as _run_cli

    return _run_cli(*args, **kwargs)


def get_cli_command(*args, **kwargs):
    from pmdispatch.cli.runner import get_cli_command as _get_cli_command

    return _get_cli_command(*args, **kwargs)


__all__ = ["run_cli", "get_cli_command"]
