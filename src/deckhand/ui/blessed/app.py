"""Main event loop and entry point for blessed UI."""

import sys
from typing import Optional

from blessed import Terminal
from loguru import logger

from deckhand.core.config import Config
from deckhand.core.output import drain_pending_messages, set_ui_mode
from deckhand.domain.playback import (
    TransportController,
    TransportState,
    TransportStatus,
)

from .components import render_open_prompt, render_player
from .events import handle_key
from .state import InternalCommand, UIState, set_last_log

# Transport intents reachable from a key binding
TRANSPORT_ACTIONS = {
    "toggle_play",
    "next",
    "previous",
    "volume_up",
    "volume_down",
    "request_open",
}


def execute_command(
    transport: TransportController, ui_state: UIState, command: InternalCommand
) -> UIState:
    """
    Apply a command produced by key handling to the transport.

    Args:
        transport: Transport controller to drive
        ui_state: Current UI state
        command: Command to execute

    Returns:
        Updated UI state
    """
    logger.debug(f"Executing command: {command.action}")

    if command.action == "quit":
        return ui_state

    if command.action == "open":
        transport.open(command.data["path"])
        return ui_state

    if command.action in TRANSPORT_ACTIONS:
        getattr(transport, command.action)()
        return ui_state

    logger.warning(f"Unknown command: {command.action}")
    return ui_state


def render(term: Terminal, transport: TransportController, ui_state: UIState) -> None:
    """Draw the screen for the current transport state."""
    if transport.state == TransportState.EMPTY:
        render_open_prompt(term, ui_state, transport.status)
    else:
        render_player(term, transport, ui_state)
    sys.stdout.flush()


def main_loop(
    term: Terminal,
    transport: TransportController,
    config: Config,
    initial_path: Optional[str] = None,
) -> UIState:
    """
    Main event loop: redraw, poll one key, dispatch.

    Args:
        term: blessed Terminal instance
        transport: Transport controller to drive
        config: Application configuration
        initial_path: Path to open before the first frame

    Returns:
        Final UI state
    """
    ui_state = UIState()
    frame_interval = 1.0 / config.ui.refresh_rate

    def redraw_while_loading(status: TransportStatus) -> None:
        # Loads block the loop; draw "Loading..." before they start
        if status.state == TransportState.LOADING:
            render(term, transport, ui_state)

    previous_on_change = transport.on_change
    transport.on_change = redraw_while_loading
    set_ui_mode(True)
    try:
        if initial_path:
            transport.open(initial_path)

        while not ui_state.should_quit:
            for message, color in drain_pending_messages():
                ui_state = set_last_log(ui_state, message, color)

            if config.ui.auto_advance:
                transport.advance_if_finished()

            render(term, transport, ui_state)

            key = term.inkey(timeout=frame_interval)
            if not key:
                continue

            ui_state, command = handle_key(ui_state, key, transport.state)
            if command:
                ui_state = execute_command(transport, ui_state, command)
    finally:
        set_ui_mode(False)
        transport.on_change = previous_on_change

    return ui_state


def run_interactive_ui(
    transport: TransportController, config: Config, initial_path: Optional[str] = None
) -> UIState:
    """
    Run the interactive UI until the user exits.

    Args:
        transport: Transport controller to drive
        config: Application configuration
        initial_path: Optional path to open on startup

    Returns:
        Final UI state
    """
    term = Terminal(force_styling=True if config.ui.use_colors else None)

    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        try:
            return main_loop(term, transport, config, initial_path)
        except KeyboardInterrupt:
            logger.info("Ctrl+C detected - leaving UI")
            return UIState(should_quit=True)
