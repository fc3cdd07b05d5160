"""Rendering components for the blessed UI."""

from .input import render_open_prompt
from .player import (
    create_progress_bar,
    format_controls,
    format_statusbar,
    format_timeline_label,
    render_player,
)

__all__ = [
    "render_open_prompt",
    "render_player",
    "create_progress_bar",
    "format_controls",
    "format_statusbar",
    "format_timeline_label",
]
