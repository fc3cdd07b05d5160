"""
Audio file probing via mutagen.

Used by the sink to reject undecodable files up front and to learn a
track's duration before playback starts.
"""

from pathlib import Path
from typing import Optional, Union

from loguru import logger
from mutagen import File as MutagenFile
from mutagen import MutagenError

from deckhand.domain.errors import DecodeError


def probe_duration(local_path: Union[str, Path]) -> Optional[float]:
    """Probe an audio file and return its duration in seconds.

    Returns:
        Duration in seconds, or None if the format does not expose one

    Raises:
        DecodeError: File missing, unreadable, or not a recognised audio format
    """
    local_path = Path(local_path)
    if not local_path.is_file():
        raise DecodeError(local_path, "File not found")

    try:
        audio_file = MutagenFile(str(local_path))
    except (MutagenError, OSError) as e:
        raise DecodeError(local_path, f"Cannot read audio ({e})") from e

    if audio_file is None:
        raise DecodeError(local_path, "Unrecognised audio format")

    info = getattr(audio_file, "info", None)
    length = getattr(info, "length", None)
    if not length or length <= 0:
        logger.debug(f"No duration exposed for {local_path}")
        return None

    return float(length)


def format_time(seconds: float) -> str:
    """Format time in seconds to MM:SS format."""
    if seconds < 0:
        return "00:00"

    minutes = int(seconds // 60)
    secs = int(seconds % 60)
    return f"{minutes:02d}:{secs:02d}"
