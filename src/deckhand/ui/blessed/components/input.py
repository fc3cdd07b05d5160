"""Open-path prompt rendering."""

from typing import Optional

from blessed import Terminal

from ..helpers import write_at
from ..state import UIState


def render_open_prompt(
    term: Terminal, state: UIState, message: Optional[str] = None
) -> None:
    """
    Render a centered box asking for a file or directory path.

    Args:
        term: blessed Terminal instance
        state: Current UI state (holds the typed path)
        message: Last transport message, e.g. why an open failed
    """
    width = max(20, int(term.width * 0.6))
    x = (term.width - width) // 2
    y = max(0, term.height // 2 - 3)
    inner = width - 4

    for row in range(term.height):
        write_at(term, 0, row, "")

    title = "─Open Path"
    write_at(term, x, y, term.cyan("┌" + title + "─" * (width - 2 - len(title)) + "┐"))

    prompt = "Enter file or directory path:"
    write_at(term, x, y + 1, term.cyan("│ ") + prompt.ljust(inner) + term.cyan(" │"))

    cursor = term.bold_white("█")
    # Horizontal scroll: keep the tail of a long path visible
    visible = state.path_input[-(inner - 1):] if inner > 1 else ""
    padding = " " * max(0, inner - len(visible) - 1)
    write_at(
        term,
        x,
        y + 2,
        term.cyan("│ ") + term.green(visible) + cursor + padding + term.cyan(" │"),
    )
    write_at(term, x, y + 3, term.cyan("└" + "─" * (width - 2) + "┘"))

    if message:
        write_at(term, x, y + 5, term.red(term.truncate(message, width)))

    write_at(term, x, y + 6, term.white("Enter: open | Ctrl+V: paste | Ctrl+U: clear | ESC: exit"))
