"""Playback domain - position tracking, audio device and transport.

This domain handles:
- mpv integration via JSON IPC behind the AudioSink protocol
- Pause-aware elapsed time tracking
- Transport state machine (empty, loading, ready, playing, paused)
- Playlist cursor and circular navigation
"""

from .engine import PlaybackEngine, TimeRecord, VOLUME_STEP
from .sink import AudioSink, DecodedStream, MpvSink, check_mpv_available
from .transport import TransportController, TransportState, TransportStatus

__all__ = [
    # Engine
    "PlaybackEngine",
    "TimeRecord",
    "VOLUME_STEP",
    # Sink
    "AudioSink",
    "DecodedStream",
    "MpvSink",
    "check_mpv_available",
    # Transport
    "TransportController",
    "TransportState",
    "TransportStatus",
]
