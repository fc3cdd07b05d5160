"""
Position-tracking playback engine.

Elapsed time comes from a monotonic clock and a pause ledger, not from
the device. Device command failures are logged and reported; the time
record is updated either way.
"""

import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from loguru import logger

from deckhand.core.output import log
from deckhand.domain.errors import DeviceError, LoadError

from .sink import AudioSink

VOLUME_STEP = 10
MAX_VOLUME = 100
MIN_VOLUME = 0


@dataclass
class TimeRecord:
    """Pause-aware elapsed time bookkeeping for the loaded track."""

    start_instant: Optional[float] = None
    accumulated_pause: float = 0.0
    pause_started_at: Optional[float] = None
    is_playing: bool = False
    total_duration: Optional[float] = None

    def position_at(self, now: float) -> float:
        """Elapsed playback seconds as of `now`, floored at zero."""
        if self.start_instant is None:
            return 0.0
        if self.is_playing:
            elapsed = now - self.start_instant - self.accumulated_pause
        elif self.pause_started_at is not None:
            elapsed = self.pause_started_at - self.start_instant - self.accumulated_pause
        else:
            return 0.0
        return max(0.0, elapsed)


class PlaybackEngine:
    """Owns one audio sink, one time record and the volume level."""

    def __init__(
        self,
        sink: AudioSink,
        volume: int = MAX_VOLUME,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._sink = sink
        self._clock = clock
        self._record = TimeRecord()
        self._lock = threading.Lock()
        self._loaded_path: Optional[str] = None
        self._volume = max(MIN_VOLUME, min(MAX_VOLUME, int(volume)))
        self._forward("set_gain", self._volume / 100)

    def load(self, path: Union[str, Path]) -> None:
        """Decode a file and make it the current track, stopping the previous one.

        Raises:
            DecodeError: File cannot be decoded; engine state is left unchanged
            LoadError: Device refused to queue the decoded file
        """
        stream = self._sink.open_decode(path)

        # Keep the device gated until play() so device and record agree
        self._forward("pause")
        try:
            self._sink.replace_and_play(stream)
        except DeviceError as e:
            raise LoadError(f"Device refused track: {e}") from e

        with self._lock:
            self._record = TimeRecord(total_duration=stream.total_duration())
        self._loaded_path = str(path)

        logger.info(f"Loaded {path} (duration={stream.total_duration()})")

    def play(self) -> bool:
        """Start or resume playback.

        Returns:
            False if the device rejected the command
        """
        with self._lock:
            now = self._clock()
            record = self._record
            if record.start_instant is None:
                record.start_instant = now
                record.pause_started_at = None
            elif record.pause_started_at is not None:
                record.accumulated_pause += max(0.0, now - record.pause_started_at)
                record.pause_started_at = None
            record.is_playing = True

        return self._forward("play")

    def pause(self) -> bool:
        """Pause playback. Repeated calls keep the first pause anchor.

        Returns:
            False if the device rejected the command
        """
        with self._lock:
            record = self._record
            record.is_playing = False
            # Nothing to anchor before the first play
            if record.start_instant is not None and record.pause_started_at is None:
                record.pause_started_at = self._clock()

        return self._forward("pause")

    def stop(self) -> bool:
        """Drop the queued audio and forget the current track."""
        with self._lock:
            self._record = TimeRecord()
        self._loaded_path = None
        return self._forward("stop")

    def current_position(self) -> float:
        with self._lock:
            return self._record.position_at(self._clock())

    def total_duration(self) -> Optional[float]:
        with self._lock:
            return self._record.total_duration

    def position_seconds(self) -> tuple[int, int]:
        """Whole seconds (elapsed, total); total is 0 when unknown."""
        with self._lock:
            position = self._record.position_at(self._clock())
            total = self._record.total_duration or 0.0
        return int(position), int(total)

    def progress_ratio(self) -> float:
        """Fraction of the track played, 0.0 when the duration is unknown."""
        with self._lock:
            position = self._record.position_at(self._clock())
            total = self._record.total_duration
        if not total or total <= 0:
            return 0.0
        return min(1.0, position / total)

    @property
    def volume(self) -> int:
        return self._volume

    def volume_up(self) -> int:
        return self._set_volume(self._volume + VOLUME_STEP)

    def volume_down(self) -> int:
        return self._set_volume(self._volume - VOLUME_STEP)

    def _set_volume(self, volume: int) -> int:
        self._volume = max(MIN_VOLUME, min(MAX_VOLUME, volume))
        self._forward("set_gain", self._volume / 100)
        logger.debug(f"Volume set to {self._volume}")
        return self._volume

    def is_playing(self) -> bool:
        with self._lock:
            return self._record.is_playing

    @property
    def loaded_path(self) -> Optional[str]:
        return self._loaded_path

    def is_paused(self) -> bool:
        try:
            return self._sink.is_paused()
        except DeviceError as e:
            logger.warning(f"Could not query pause state: {e}")
            return not self.is_playing()

    def is_idle(self) -> bool:
        """True when the device has nothing left to play."""
        try:
            return self._sink.is_empty()
        except DeviceError as e:
            logger.warning(f"Could not query device queue: {e}")
            return False

    def close(self) -> None:
        self._sink.close()

    def _forward(self, command: str, *args) -> bool:
        """Send a command to the sink; log and report failure instead of raising."""
        try:
            getattr(self._sink, command)(*args)
            return True
        except DeviceError as e:
            log(f"Audio device: {command} failed ({e})", level="warning")
            return False
