"""
Playlist building from the filesystem.

Classifies a user-supplied path as an audio file or a directory and turns
it into an ordered list of tracks. Directories are listed one level deep
only, and entries are sorted by file name so the playlist order does not
depend on how the filesystem happens to enumerate them.
"""

from pathlib import Path
from typing import Iterable, Union

from loguru import logger

from deckhand.domain.errors import PathError

from .models import Track


def is_supported_format(local_path: Path, supported_formats: Iterable[str]) -> bool:
    """Check if file format is supported (case-insensitive extension match)."""
    return local_path.suffix.lower() in {fmt.lower() for fmt in supported_formats}


def list_audio_files(directory: Path, supported_formats: Iterable[str]) -> list[Path]:
    """List direct-child audio files of a directory, sorted by name."""
    formats = list(supported_formats)
    try:
        entries = [
            entry
            for entry in directory.iterdir()
            if entry.is_file() and is_supported_format(entry, formats)
        ]
    except PermissionError as e:
        raise PathError(directory, "Permission denied") from e

    return sorted(entries, key=lambda entry: entry.name)


def build_playlist(
    path: Union[str, Path], supported_formats: Iterable[str]
) -> list[Track]:
    """Turn a file or directory path into a playlist.

    Args:
        path: Audio file or directory of audio files
        supported_formats: Extensions (with leading dot) treated as audio

    Returns:
        Non-empty list of tracks

    Raises:
        PathError: Path missing, not a supported file, or directory holds no audio
    """
    formats = list(supported_formats)
    raw = str(path).strip()
    if not raw:
        raise PathError(raw, "No path given")

    local_path = Path(raw).expanduser()

    if local_path.is_file():
        if not is_supported_format(local_path, formats):
            raise PathError(local_path, "Not a supported audio file")
        files = [local_path]
    elif local_path.is_dir():
        files = list_audio_files(local_path, formats)
        if not files:
            raise PathError(local_path, "No audio files found")
    elif local_path.exists():
        raise PathError(local_path, "Not a file or directory")
    else:
        raise PathError(local_path, "No such file or directory")

    logger.debug(f"Built playlist of {len(files)} track(s) from {local_path}")
    return [Track.from_path(file) for file in files]
