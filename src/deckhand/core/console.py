"""Shared Rich Console for output outside the full-screen UI.

Startup failures, the `--list` table and shutdown notes are printed here;
everything drawn while the player is running goes through blessed.
"""

from rich.console import Console

_console: Console | None = None


def get_console() -> Console:
    """Return the process-wide Console, creating it on first use."""
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def safe_print(message: str, style: str | None = None) -> None:
    """Print a line, optionally styled (e.g. "dim", "bold red")."""
    get_console().print(message, style=style)


def print_error(message: str, hint: str | None = None) -> None:
    """Print a user-facing error with an optional dimmed follow-up hint."""
    console = get_console()
    console.print(f"❌ {message}", style="bold red")
    if hint:
        console.print(f"   {hint}", style="dim")
