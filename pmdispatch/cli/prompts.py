"""Interactive prompts (yes/no and single choice) built on rich.

Both helpers return their non-interactive default when stdin is not a
terminal, so they never block a piped or CI invocation.
"""

import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

console = Console()


def is_interactive() -> bool:
    return sys.stdin.isatty()


def confirm(message: str, default: bool = False) -> bool:
    if not is_interactive():
        return default
    try:
        return Confirm.ask(message, default=default, console=console)
    except (KeyboardInterrupt, EOFError):
        return False


def select(message: str, choices: Sequence[str]) -> Optional[str]:
    """Ask for one of ``choices``. Returns None when cancelled."""
    if not choices or not is_interactive():
        return None

    for index, choice in enumerate(choices, start=1):
        console.print(f"  [cyan]{index}[/cyan]. {choice}", highlight=False)
    numbers = [str(i) for i in range(1, len(choices) + 1)]
    try:
        picked = Prompt.ask(message, choices=numbers, show_choices=False, console=console)
    except (KeyboardInterrupt, EOFError):
        return None
    return choices[int(picked) - 1]
