"""UI state management - immutable state updates."""

from dataclasses import dataclass, field, replace
from typing import Any, Optional


@dataclass
class InternalCommand:
    """Type-safe command from key handling to the transport dispatcher."""

    action: str  # open, toggle_play, next, previous, volume_up, volume_down, request_open, quit
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class UIState:
    """
    UI-only state. Playback state lives in the TransportController;
    this only holds what the screen needs between frames.
    """

    path_input: str = ""
    last_log: Optional[tuple[str, str]] = None  # (message, color) from log()
    should_quit: bool = False


def append_input_char(state: UIState, char: str) -> UIState:
    return replace(state, path_input=state.path_input + char)


def delete_input_char(state: UIState) -> UIState:
    return replace(state, path_input=state.path_input[:-1])


def clear_input(state: UIState) -> UIState:
    return replace(state, path_input="")


def set_input(state: UIState, text: str) -> UIState:
    return replace(state, path_input=text)


def set_last_log(state: UIState, message: str, color: str = "white") -> UIState:
    return replace(state, last_log=(message, color))


def request_quit(state: UIState) -> UIState:
    return replace(state, should_quit=True)
