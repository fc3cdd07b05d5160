"""
Unified output system using Loguru.
Routes user-facing messages to the log file plus either stdout or the UI.
"""

import threading
from pathlib import Path

from loguru import logger

from .config import LoggingConfig, get_data_dir

# Global UI mode tracking (set while the full-screen UI owns the terminal)
_ui_mode_active = False
_ui_mode_lock = threading.Lock()

# Messages logged while the UI is active, drained by the main loop
_pending_messages: list[tuple[str, str]] = []
_pending_messages_lock = threading.Lock()

LEVEL_COLORS = {
    "debug": "cyan",
    "info": "white",
    "warning": "yellow",
    "error": "red",
}


def get_log_file_path() -> Path:
    """Get the default path to the log file."""
    return get_data_dir() / "deckhand.log"


def setup_loguru(
    log_file: Path,
    level: str = "INFO",
    max_file_size_mb: int = 10,
    backup_count: int = 5,
) -> None:
    """
    Configure loguru for file-only logging (the terminal UI owns the screen).

    Args:
        log_file: Path to log file
        level: Minimum level for file logging (DEBUG, INFO, WARNING, ERROR)
        max_file_size_mb: Size at which the log file is rotated
        backup_count: Number of rotated files to keep
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)

    # Remove default stderr handler
    logger.remove()

    logger.add(
        log_file,
        rotation=f"{max_file_size_mb} MB",
        retention=backup_count,
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,
    )

    logger.info(f"Loguru initialized: {log_file} (level={level})")


def setup_from_config(logging_config: LoggingConfig) -> Path:
    """Configure loguru from the [logging] config section.

    Returns:
        The log file actually in use
    """
    log_file = (
        Path(logging_config.log_file)
        if logging_config.log_file
        else get_log_file_path()
    )
    setup_loguru(
        log_file,
        level=logging_config.level,
        max_file_size_mb=logging_config.max_file_size_mb,
        backup_count=logging_config.backup_count,
    )
    return log_file


def set_ui_mode(active: bool) -> None:
    """Enable or disable UI mode. In UI mode, log() stops printing to stdout."""
    global _ui_mode_active
    with _ui_mode_lock:
        _ui_mode_active = active
    logger.debug(f"UI mode {'enabled' if active else 'disabled'}")


def drain_pending_messages() -> list[tuple[str, str]]:
    """
    Get and clear all messages logged while in UI mode.

    Returns:
        List of (message, color) tuples
    """
    global _pending_messages
    with _pending_messages_lock:
        messages = _pending_messages[:]
        _pending_messages = []
        return messages


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to file AND shows the message to the user.

    In UI mode the message is queued for the UI; otherwise it is printed.

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)

    with _ui_mode_lock:
        if _ui_mode_active:
            with _pending_messages_lock:
                _pending_messages.append((message, LEVEL_COLORS.get(level, "white")))
        else:
            print(message)
