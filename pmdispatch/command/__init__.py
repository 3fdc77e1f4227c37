"""Command module: templating and per-verb intent resolution.

Public API:
    get_command(agent, verb, args) -> str
    parse_ni / parse_nr / parse_nu / parse_nun / parse_nlx / parse_na
"""

from pmdispatch.command.intents import (
    Runner,
    parse_na,
    parse_ni,
    parse_nlx,
    parse_nr,
    parse_nu,
    parse_nun,
)
from pmdispatch.command.templater import UnsupportedCommand, get_command, parse_verb, quote_arg

__all__ = [
    "Runner",
    "UnsupportedCommand",
    "get_command",
    "parse_verb",
    "quote_arg",
    "parse_na",
    "parse_ni",
    "parse_nlx",
    "parse_nr",
    "parse_nu",
    "parse_nun",
]
