"""
Transport controls: playlist cursor plus the play/pause state machine.

State and its diagnostic message travel together as one immutable
TransportStatus, replaced on every transition. Intents never raise; path
and load failures become status messages so a bad file cannot end the
session.
"""

from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, NamedTuple, Optional, Union

from loguru import logger

from deckhand.core.output import log
from deckhand.domain.errors import LoadError, PathError
from deckhand.domain.library import Track, build_playlist

from .engine import PlaybackEngine

# Minimum playback time before an idle device counts as "track finished" (seconds)
MIN_PLAYBACK_TIME = 3.0


class TransportState(Enum):
    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"


class TransportStatus(NamedTuple):
    """Current transport state with the message from the transition into it."""

    state: TransportState
    message: Optional[str] = None


class TransportController:
    """Drives a PlaybackEngine from a playlist and user intents.

    Args:
        engine: Engine that owns the audio device
        supported_formats: File extensions treated as audio when opening paths
        on_change: Called with the new TransportStatus after every transition
    """

    def __init__(
        self,
        engine: PlaybackEngine,
        supported_formats: Iterable[str],
        on_change: Optional[Callable[[TransportStatus], None]] = None,
    ):
        self._engine = engine
        self._supported_formats = list(supported_formats)
        self._on_change = on_change
        self._playlist: list[Track] = []
        self._current_index = 0
        self._status = TransportStatus(TransportState.EMPTY)

    # Queries

    @property
    def transport_status(self) -> TransportStatus:
        return self._status

    @property
    def state(self) -> TransportState:
        return self._status.state

    @property
    def status(self) -> Optional[str]:
        return self._status.message

    @property
    def playlist(self) -> tuple[Track, ...]:
        return tuple(self._playlist)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_track(self) -> Optional[Track]:
        if not self._playlist:
            return None
        return self._playlist[self._current_index]

    @property
    def engine(self) -> PlaybackEngine:
        return self._engine

    @property
    def on_change(self) -> Optional[Callable[[TransportStatus], None]]:
        return self._on_change

    @on_change.setter
    def on_change(self, callback: Optional[Callable[[TransportStatus], None]]) -> None:
        self._on_change = callback

    def current_track_title(self) -> str:
        track = self.current_track
        return track.title if track else ""

    def position_seconds(self) -> tuple[int, int]:
        return self._engine.position_seconds()

    def progress_ratio(self) -> float:
        return self._engine.progress_ratio()

    def volume(self) -> int:
        return self._engine.volume

    def is_paused(self) -> bool:
        return self._engine.is_paused()

    # Intents

    def open(self, path: Union[str, Path]) -> TransportState:
        """Replace the playlist with the audio at `path` and start playing it.

        A failed open still discards the previous playlist.
        """
        if self._engine.is_playing():
            self._engine.pause()
        self._transition(TransportState.LOADING, "Loading...")

        self._playlist = []
        self._current_index = 0

        try:
            playlist = build_playlist(path, self._supported_formats)
        except PathError as e:
            log(f"Failed to open: {e}", level="warning")
            self._engine.stop()
            self._transition(TransportState.EMPTY, f"Failed to open: {e}")
            return self.state

        self._playlist = playlist
        log(f"Opened {path}: {len(playlist)} track(s)")
        self._transition(TransportState.READY, f"Opened {len(playlist)} track(s)")

        if self._load_current_track():
            self._play()
        return self.state

    def request_open(self) -> None:
        """Stop using the current playlist and wait for a new path."""
        if self.state == TransportState.EMPTY:
            return
        self._engine.pause()
        self._playlist = []
        self._current_index = 0
        self._transition(TransportState.EMPTY)

    def toggle_play(self) -> None:
        if self.state == TransportState.PLAYING:
            self._pause()
        else:
            self.play()

    def play(self) -> None:
        """Start or resume playback; no-op without a playlist or while playing."""
        state = self.state
        if state == TransportState.PAUSED:
            self._play()
        elif state == TransportState.READY:
            # Previous load failed: retry before playing
            if self._engine.loaded_path is None and not self._load_current_track():
                return
            self._play()

    def pause(self) -> None:
        if self.state == TransportState.PLAYING:
            self._pause()

    def next(self) -> None:
        """Advance the cursor, wrapping to the first track, and play it."""
        if not self._playlist:
            return
        self._current_index = (self._current_index + 1) % len(self._playlist)
        if self._load_current_track():
            self._play()

    def previous(self) -> None:
        """Step the cursor back, wrapping to the last track, and play it."""
        if not self._playlist:
            return
        self._current_index = (self._current_index - 1) % len(self._playlist)
        if self._load_current_track():
            self._play()

    def volume_up(self) -> int:
        return self._engine.volume_up()

    def volume_down(self) -> int:
        return self._engine.volume_down()

    def check_track_finished(self) -> bool:
        """True once the device has drained the track that is playing.

        Only reports; advancing is left to the caller.
        """
        if self.state != TransportState.PLAYING:
            return False
        if self._engine.current_position() < MIN_PLAYBACK_TIME:
            return False
        return self._engine.is_idle()

    def advance_if_finished(self) -> bool:
        if not self.check_track_finished():
            return False
        log(f"Finished {self.current_track_title()}")
        self.next()
        return True

    # Internals

    def _load_current_track(self) -> bool:
        track = self.current_track
        if track is None:
            return False

        self._transition(TransportState.LOADING, f"Loading {track.title}")
        try:
            self._engine.load(track.file_path)
        except LoadError as e:
            log(f"Error loading {track.title}: {e}", level="error")
            self._engine.stop()
            self._transition(TransportState.READY, f"Error loading audio: {e}")
            return False

        self._transition(TransportState.READY, f"Loaded {track.title}")
        return True

    def _play(self) -> None:
        if self._engine.play():
            self._transition(TransportState.PLAYING, "Playing")
        else:
            self._transition(TransportState.PLAYING, "Playing (audio device not responding)")

    def _pause(self) -> None:
        if self._engine.pause():
            self._transition(TransportState.PAUSED, "Paused")
        else:
            self._transition(TransportState.PAUSED, "Paused (audio device not responding)")

    def _transition(self, state: TransportState, message: Optional[str] = None) -> None:
        self._status = TransportStatus(state, message)
        logger.debug(f"Transport -> {state.value}: {message}")
        if self._on_change:
            self._on_change(self._status)
