"""Keyboard event handling for the open-path prompt and the player screen.

Key Functions:
    - parse_key: Turn a blessed Keystroke into an event dict
    - handle_key: Main keyboard dispatcher
"""

from typing import Optional

from blessed.keyboard import Keystroke

from deckhand.domain.playback import TransportState
from deckhand.ui.blessed.helpers import read_clipboard
from deckhand.ui.blessed.state import (
    InternalCommand,
    UIState,
    append_input_char,
    clear_input,
    delete_input_char,
    request_quit,
    set_input,
)

# Player-screen key bindings: event type or character -> transport action
PLAYER_BINDINGS = {
    "arrow_left": "previous",
    "arrow_right": "next",
    "arrow_up": "volume_up",
    "arrow_down": "volume_down",
    " ": "toggle_play",
    "o": "request_open",
}


def parse_key(key: Keystroke) -> dict:
    """
    Parse keystroke into event dictionary.

    Args:
        key: blessed Keystroke

    Returns:
        Event dictionary describing the key press
    """
    event = {
        "type": "unknown",
        "key": key,
        "name": key.name if hasattr(key, "name") else None,
        "char": str(key) if key and key.isprintable() else None,
    }

    if key.name == "KEY_ENTER" or key in ("\n", "\r"):
        event["type"] = "enter"
    elif key.name == "KEY_ESCAPE":
        event["type"] = "escape"
    elif key.name == "KEY_BACKSPACE" or key == "\x7f":
        event["type"] = "backspace"
    elif key.name == "KEY_UP":
        event["type"] = "arrow_up"
    elif key.name == "KEY_DOWN":
        event["type"] = "arrow_down"
    elif key.name == "KEY_LEFT":
        event["type"] = "arrow_left"
    elif key.name == "KEY_RIGHT":
        event["type"] = "arrow_right"
    elif key == "\x03":  # Ctrl+C
        event["type"] = "ctrl_c"
    elif key == "\x15":  # Ctrl+U
        event["type"] = "ctrl_u"
    elif key == "\x16":  # Ctrl+V
        event["type"] = "ctrl_v"
    elif key and key.isprintable():
        event["type"] = "char"

    return event


def handle_open_prompt_key(
    state: UIState, event: dict
) -> tuple[UIState, Optional[InternalCommand]]:
    """Path entry: type, edit, Ctrl+V to paste, Enter to open, Esc to quit."""
    event_type = event["type"]

    if event_type in ("escape", "ctrl_c"):
        return request_quit(state), InternalCommand(action="quit")

    if event_type == "enter":
        path = state.path_input.strip()
        if not path:
            return state, None
        return clear_input(state), InternalCommand(action="open", data={"path": path})

    if event_type == "backspace":
        return delete_input_char(state), None

    if event_type == "ctrl_u":
        return clear_input(state), None

    if event_type == "ctrl_v":
        text = read_clipboard()
        return (set_input(state, text) if text else state), None

    if event_type == "char":
        return append_input_char(state, event["char"]), None

    return state, None


def handle_player_key(
    state: UIState, event: dict
) -> tuple[UIState, Optional[InternalCommand]]:
    """Player screen: transport controls."""
    if event["type"] in ("escape", "ctrl_c"):
        return request_quit(state), InternalCommand(action="quit")

    binding = PLAYER_BINDINGS.get(event["type"]) or PLAYER_BINDINGS.get(
        event["char"] or ""
    )
    if binding:
        return state, InternalCommand(action=binding)

    return state, None


def handle_key(
    state: UIState, key: Keystroke, transport_state: TransportState
) -> tuple[UIState, Optional[InternalCommand]]:
    """
    Route a key press to the handler for the current screen.

    Args:
        state: Current UI state
        key: blessed Keystroke
        transport_state: Decides which screen is showing

    Returns:
        Tuple of (updated UI state, command to execute or None)
    """
    event = parse_key(key)

    if transport_state == TransportState.EMPTY:
        return handle_open_prompt_key(state, event)
    return handle_player_key(state, event)
