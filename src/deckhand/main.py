"""
Application startup and shutdown for the interactive player.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from deckhand.core import config
from deckhand.core.console import get_console, print_error, safe_print
from deckhand.core.output import setup_from_config
from deckhand.domain.errors import DecodeError, DeviceError, PathError
from deckhand.domain.library import build_playlist, format_time, probe_duration
from deckhand.domain.playback import MpvSink, PlaybackEngine, TransportController


def load_runtime_config(
    config_path: Optional[str] = None,
    volume: Optional[int] = None,
    log_level: Optional[str] = None,
) -> config.Config:
    """Load config from disk and apply command line overrides."""
    config.ensure_directories()
    current_config = config.load_config(Path(config_path) if config_path else None)

    if volume is not None:
        current_config.player.volume = config.clamp_volume(volume)
    if log_level:
        current_config.logging.level = log_level.upper()

    return current_config


def create_transport(current_config: config.Config) -> TransportController:
    """Start the audio device and wire engine and transport together.

    Raises:
        DeviceError: No usable audio output
    """
    initial_gain = current_config.player.volume / 100
    sink = MpvSink(current_config.player, initial_gain=initial_gain)
    engine = PlaybackEngine(sink, volume=current_config.player.volume)
    return TransportController(engine, current_config.music.supported_formats)


def interactive_mode(
    initial_path: Optional[str] = None,
    config_path: Optional[str] = None,
    volume: Optional[int] = None,
    log_level: Optional[str] = None,
) -> int:
    """Run the full-screen player.

    Returns:
        Exit code (0 for success, 1 when the audio device is unavailable)
    """
    from deckhand.ui.blessed import run_interactive_ui

    current_config = load_runtime_config(config_path, volume, log_level)
    log_file = setup_from_config(current_config.logging)

    try:
        transport = create_transport(current_config)
    except DeviceError as e:
        logger.error(f"Audio device unavailable: {e}")
        print_error(
            f"Audio device unavailable: {e}",
            hint="deckhand needs mpv installed and on PATH.",
        )
        return 1

    try:
        run_interactive_ui(transport, current_config, initial_path)
    except KeyboardInterrupt:
        safe_print("\n[yellow]Interrupted by user. Cleaning up...[/yellow]")
    finally:
        transport.engine.close()
        logger.info("Audio device released")

    safe_print(f"Log written to {log_file}", style="dim")
    return 0


def list_playlist(
    path: str, config_path: Optional[str] = None, log_level: Optional[str] = None
) -> int:
    """Print the playlist `path` would produce, with probed durations.

    Returns:
        Exit code (0 for success, 1 when the path yields no playlist)
    """
    from rich.table import Table

    current_config = load_runtime_config(config_path, log_level=log_level)
    setup_from_config(current_config.logging)

    try:
        tracks = build_playlist(path, current_config.music.supported_formats)
    except PathError as e:
        print_error(str(e))
        return 1

    table = Table(title=f"Playlist: {path}")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Duration", justify="right")

    for index, track in enumerate(tracks, start=1):
        try:
            duration = probe_duration(track.file_path)
            duration_str = format_time(duration) if duration is not None else "--:--"
        except DecodeError as e:
            logger.warning(f"Cannot probe {track.file_path}: {e}")
            duration_str = "[red]unreadable[/red]"
        table.add_row(str(index), track.title, duration_str)

    get_console().print(table)
    return 0
