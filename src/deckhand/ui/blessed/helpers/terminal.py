"""Positioned terminal writes for the player and prompt screens."""

import sys

from blessed import Terminal


def write_at(
    term: Terminal, x: int, y: int, content: str, *, clear: bool = True
) -> bool:
    """Write content at a screen cell, clearing the old line tail first.

    Rows outside the visible screen are skipped, so layouts computed from
    `term.height` degrade on tiny terminals instead of scrolling.

    Args:
        term: Blessed terminal instance
        x: Column position (0-indexed)
        y: Row position (0-indexed)
        content: Text to write (can include terminal formatting)
        clear: Clear to end of line before writing

    Returns:
        True if anything was written
    """
    if y < 0 or y >= term.height or x >= term.width:
        return False

    prefix = term.move_xy(max(0, x), y)
    if clear:
        prefix += term.clear_eol
    sys.stdout.write(prefix + content)
    return True
