"""Player screen rendering: title, timeline, controls and status bar."""

from typing import Optional

from blessed import Terminal

from deckhand.domain.library import format_time
from deckhand.domain.playback import TransportController, TransportState

from ..helpers import write_at
from ..state import UIState

BOX_HEIGHT = 3


def format_timeline_label(elapsed: int, total: int, volume: int) -> str:
    """'MM:SS/MM:SS    Volume: NN%' for the timeline gauge."""
    return f"{format_time(elapsed)}/{format_time(total)}    Volume: {volume:02d}%"


def format_controls(state: TransportState) -> str:
    action = "Pause" if state == TransportState.PLAYING else "Play "
    return f"< Previous | Next > | SPACE {action} | ↑↓ Vol | o Open | ESC Exit"


def format_statusbar(index: int, length: int, message: Optional[str]) -> str:
    position = index + 1 if length else 0
    return f"Playlist: {position}/{length} | Message: {message or 'None'}"


def create_progress_bar(ratio: float, width: int, term: Terminal) -> str:
    """Create a colored progress bar filling `ratio` of `width` cells."""
    if width <= 0:
        return ""

    filled = int(width * max(0.0, min(1.0, ratio)))
    parts = []
    for i in range(filled):
        char_percentage = (i + 1) / width
        if char_percentage < 0.33:
            parts.append(term.green("█"))
        elif char_percentage < 0.66:
            parts.append(term.yellow("█"))
        else:
            parts.append(term.red("█"))
    parts.append(term.white("░" * (width - filled)))
    return "".join(parts)


def render_box(term: Terminal, y: int, title: str, body: str, align: str = "left") -> None:
    """Draw a 3-line bordered box with a title in the top border."""
    inner = max(0, term.width - 4)
    title_part = f"─{title}" if title else ""
    top = "┌" + title_part + "─" * max(0, term.width - 2 - len(title_part)) + "┐"

    text = term.truncate(body, inner)
    pad = " " * max(0, inner - term.length(text))
    line = pad + text if align == "right" else text + pad

    write_at(term, 0, y, term.cyan(top))
    write_at(term, 0, y + 1, term.cyan("│ ") + line + term.cyan(" │"))
    write_at(term, 0, y + 2, term.cyan("└" + "─" * max(0, term.width - 2) + "┘"))


def render_player(
    term: Terminal, transport: TransportController, state: UIState
) -> None:
    """Render the full player screen for a non-empty transport."""
    elapsed, total = transport.position_seconds()

    render_box(term, 0, "Title", term.bold(transport.current_track_title()))

    # Gap between header and the bottom boxes: blank except the latest log line
    for row in range(BOX_HEIGHT, term.height - 3 * BOX_HEIGHT):
        write_at(term, 0, row, "")
    if state.last_log and term.height > 4 * BOX_HEIGHT:
        message, color = state.last_log
        write_at(
            term, 1, BOX_HEIGHT, getattr(term, color)(term.truncate(message, term.width - 2))
        )

    timeline_y = term.height - 3 * BOX_HEIGHT
    label = format_timeline_label(elapsed, total, transport.volume())
    bar_width = max(0, term.width - 4 - len(label) - 2)
    bar = create_progress_bar(transport.progress_ratio(), bar_width, term)
    render_box(term, timeline_y, "Timeline", f"{bar}  {term.bold(label)}")

    render_box(term, timeline_y + BOX_HEIGHT, "Controls", format_controls(transport.state))

    render_box(
        term,
        timeline_y + 2 * BOX_HEIGHT,
        "",
        format_statusbar(
            transport.current_index, len(transport.playlist), transport.status
        ),
        align="right",
    )
