"""Library domain - tracks and playlist building.

This domain handles:
- Track model (file path + display title)
- Audio file classification by extension
- Playlist building from a file or directory
- Duration probing via mutagen
"""

from .metadata import format_time, probe_duration
from .models import Track
from .scanner import build_playlist, is_supported_format, list_audio_files

__all__ = [
    "Track",
    "build_playlist",
    "is_supported_format",
    "list_audio_files",
    "probe_duration",
    "format_time",
]
