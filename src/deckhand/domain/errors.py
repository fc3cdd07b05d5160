"""Playback error hierarchy."""

from pathlib import Path
from typing import Optional, Union


class PlaybackError(Exception):
    """Base class for all playback errors."""


class LoadError(PlaybackError):
    """A track could not be loaded into the engine."""


class DecodeError(LoadError):
    """File exists but cannot be decoded or probed."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class PathError(PlaybackError):
    """Path is missing, not a file or directory, or holds no audio."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"{reason}: {self.path}")


class DeviceError(PlaybackError):
    """Audio output device is unavailable or rejected a command."""

    def __init__(self, message: str, command: Optional[str] = None):
        self.command = command
        super().__init__(message)
