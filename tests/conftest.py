"""Shared fakes for playback tests: a controllable clock and an in-memory sink."""

from pathlib import Path
from typing import Optional

import pytest

from deckhand.core.output import drain_pending_messages, set_ui_mode
from deckhand.domain.errors import DecodeError, DeviceError
from deckhand.domain.playback import DecodedStream, PlaybackEngine, TransportController

AUDIO_FORMATS = [".mp3", ".flac", ".wav", ".ogg"]


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSink:
    """AudioSink double recording every command it receives.

    Durations are looked up by file name; names listed in `undecodable`
    raise DecodeError. Setting `fail_commands` makes device commands raise.
    """

    def __init__(self, durations: Optional[dict[str, Optional[float]]] = None):
        self.durations = durations or {}
        self.undecodable: set[str] = set()
        self.fail_commands = False
        self.calls: list[tuple] = []
        self.queued: Optional[str] = None
        self.paused = True
        self.gain: Optional[float] = None
        self.closed = False

    def _record(self, *call) -> None:
        self.calls.append(call)
        if self.fail_commands:
            raise DeviceError("device gone", command=call[0])

    def open_decode(self, path) -> DecodedStream:
        name = Path(path).name
        if name in self.undecodable:
            raise DecodeError(path, "Unrecognised audio format")
        return DecodedStream(path=str(path), duration=self.durations.get(name))

    def replace_and_play(self, stream: DecodedStream) -> None:
        self._record("replace_and_play", stream.path)
        self.queued = stream.path

    def play(self) -> None:
        self._record("play")
        self.paused = False

    def pause(self) -> None:
        self._record("pause")
        self.paused = True

    def stop(self) -> None:
        self._record("stop")
        self.queued = None

    def set_gain(self, fraction: float) -> None:
        self._record("set_gain", fraction)
        self.gain = fraction

    def is_paused(self) -> bool:
        return self.paused

    def is_empty(self) -> bool:
        return self.queued is None

    def close(self) -> None:
        self.closed = True

    def command_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink(durations={"a.mp3": 180.0, "b.mp3": 200.0, "c.flac": 95.5})


@pytest.fixture
def engine(sink: FakeSink, clock: FakeClock) -> PlaybackEngine:
    return PlaybackEngine(sink, volume=50, clock=clock)


@pytest.fixture
def transport(engine: PlaybackEngine) -> TransportController:
    return TransportController(engine, AUDIO_FORMATS)


@pytest.fixture
def make_transport(clock: FakeClock):
    """Factory for a transport over a fresh FakeSink with custom durations."""

    def _make(
        durations: Optional[dict[str, Optional[float]]] = None,
        volume: int = 100,
        on_change=None,
    ) -> tuple[TransportController, FakeSink]:
        sink = FakeSink(durations=durations)
        engine = PlaybackEngine(sink, volume=volume, clock=clock)
        return TransportController(engine, AUDIO_FORMATS, on_change=on_change), sink

    return _make


@pytest.fixture
def music_dir(tmp_path: Path) -> Path:
    """Directory with two tracks, a non-audio file and a nested folder."""
    (tmp_path / "b.mp3").write_bytes(b"fake audio b")
    (tmp_path / "a.mp3").write_bytes(b"fake audio a")
    (tmp_path / "cover.jpg").write_bytes(b"not audio")
    nested = tmp_path / "bonus"
    nested.mkdir()
    (nested / "c.flac").write_bytes(b"nested audio")
    return tmp_path


@pytest.fixture(autouse=True)
def isolated_xdg_dirs(tmp_path_factory, monkeypatch) -> Path:
    """Keep config and log files written during tests out of the real home."""
    base = tmp_path_factory.mktemp("xdg")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(base / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(base / "data"))
    return base


@pytest.fixture
def ui_messages():
    """Run in UI mode; returns a function that drains queued (message, color) pairs."""
    drain_pending_messages()
    set_ui_mode(True)
    yield drain_pending_messages
    set_ui_mode(False)
    drain_pending_messages()
