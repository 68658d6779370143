"""Shared rich console with the todofocus colour theme."""

from functools import lru_cache

from rich.console import Console
from rich.theme import Theme

THEME = Theme(
    {
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "muted": "dim",
        "task.id": "cyan",
        "tag": "magenta",
        "timer": "bold green",
    }
)


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Console used by every command, notifier and formatter."""
    return Console(highlight=highlight, theme=THEME)
