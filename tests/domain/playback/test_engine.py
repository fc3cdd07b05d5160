"""Tests for the position-tracking playback engine."""

import pytest

from deckhand.domain.errors import DecodeError, LoadError
from deckhand.domain.playback import PlaybackEngine, TimeRecord


class TestTimeRecord:
    """Tests for TimeRecord.position_at."""

    def test_default_record_is_at_zero(self) -> None:
        record = TimeRecord()
        assert record.position_at(5000.0) == 0.0
        assert record.total_duration is None
        assert not record.is_playing

    def test_never_started_ignores_other_fields(self) -> None:
        record = TimeRecord(accumulated_pause=3.0, pause_started_at=10.0)
        assert record.position_at(50.0) == 0.0

    def test_playing_subtracts_accumulated_pause(self) -> None:
        record = TimeRecord(start_instant=100.0, accumulated_pause=5.0, is_playing=True)
        assert record.position_at(130.0) == 25.0

    def test_paused_uses_pause_anchor(self) -> None:
        record = TimeRecord(
            start_instant=100.0, accumulated_pause=5.0, pause_started_at=120.0
        )
        assert record.position_at(999.0) == 15.0

    def test_clock_going_backwards_floors_at_zero(self) -> None:
        record = TimeRecord(start_instant=100.0, is_playing=True)
        assert record.position_at(90.0) == 0.0


class TestPlayPause:
    """Pause-aware elapsed time across play/pause sequences."""

    def test_position_zero_before_first_play(self, engine, clock) -> None:
        engine.load("/music/a.mp3")
        clock.advance(30)
        assert engine.current_position() == 0.0

    def test_position_monotonic_while_playing(self, engine, clock) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        samples = []
        for _ in range(5):
            clock.advance(0.7)
            samples.append(engine.current_position())
        assert samples == sorted(samples)
        assert samples[-1] == pytest.approx(3.5)

    def test_pause_freezes_position(self, engine, clock) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        clock.advance(12)
        engine.pause()

        frozen = engine.current_position()
        for _ in range(3):
            clock.advance(40)
            assert engine.current_position() == frozen
        assert frozen == pytest.approx(12)

    @pytest.mark.parametrize("paused_for", [0.0, 1.0, 300.0])
    def test_resume_continuity_independent_of_pause_length(
        self, engine, clock, paused_for
    ) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        clock.advance(10)
        engine.pause()
        clock.advance(paused_for)
        engine.play()
        clock.advance(5)
        assert engine.current_position() == pytest.approx(15)

    def test_double_play_does_not_double_count(self, engine, clock) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        clock.advance(5)
        engine.play()
        assert engine.current_position() == pytest.approx(5)
        clock.advance(5)
        assert engine.current_position() == pytest.approx(10)

    def test_double_pause_keeps_first_anchor(self, engine, clock) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        clock.advance(8)
        engine.pause()
        clock.advance(20)
        engine.pause()
        assert engine.current_position() == pytest.approx(8)

        engine.play()
        clock.advance(2)
        assert engine.current_position() == pytest.approx(10)

    def test_pause_before_first_play_leaves_no_anchor(self, engine, clock) -> None:
        engine.load("/music/a.mp3")
        engine.pause()
        clock.advance(10)
        engine.play()
        assert engine._record.pause_started_at is None

        clock.advance(5)
        engine.pause()
        assert engine.current_position() == pytest.approx(5)

        clock.advance(30)
        engine.play()
        clock.advance(2)
        assert engine.current_position() == pytest.approx(7)

    def test_play_and_pause_forward_to_device(self, engine, sink) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        assert sink.paused is False
        engine.pause()
        assert sink.paused is True
        assert engine.is_paused() is True

    def test_is_playing_tracks_record(self, engine) -> None:
        engine.load("/music/a.mp3")
        assert not engine.is_playing()
        engine.play()
        assert engine.is_playing()
        engine.pause()
        assert not engine.is_playing()


class TestLoad:
    """Tests for PlaybackEngine.load."""

    def test_load_resets_position_and_sets_duration(self, engine, clock) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        clock.advance(42)

        engine.load("/music/b.mp3")
        assert engine.current_position() == 0.0
        assert engine.total_duration() == 200.0
        assert not engine.is_playing()

    def test_load_unknown_duration_is_none(self, engine) -> None:
        engine.load("/music/mystery.ogg")
        assert engine.total_duration() is None

    def test_load_gates_device_before_replacing(self, engine, sink) -> None:
        engine.load("/music/a.mp3")
        names = sink.command_names()
        assert names.index("pause") < names.index("replace_and_play")
        assert sink.queued == "/music/a.mp3"
        assert engine.loaded_path == "/music/a.mp3"

    def test_decode_failure_leaves_engine_untouched(self, engine, sink, clock) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        clock.advance(10)
        sink.undecodable.add("broken.mp3")

        with pytest.raises(DecodeError):
            engine.load("/music/broken.mp3")

        assert engine.current_position() == pytest.approx(10)
        assert engine.total_duration() == 180.0
        assert engine.is_playing()
        assert sink.queued == "/music/a.mp3"

    def test_device_refusing_track_raises_load_error(self, engine, sink) -> None:
        sink.fail_commands = True
        with pytest.raises(LoadError) as exc_info:
            engine.load("/music/a.mp3")
        assert not isinstance(exc_info.value, DecodeError)
        assert engine.loaded_path is None


class TestDeviceFailures:
    """Time tracking must not depend on device acknowledgement."""

    def test_play_failure_still_advances_position(self, engine, sink, clock) -> None:
        engine.load("/music/a.mp3")
        sink.fail_commands = True

        assert engine.play() is False
        clock.advance(7)
        assert engine.is_playing()
        assert engine.current_position() == pytest.approx(7)

    def test_pause_failure_still_freezes_position(self, engine, sink, clock) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        clock.advance(3)
        sink.fail_commands = True

        assert engine.pause() is False
        clock.advance(30)
        assert engine.current_position() == pytest.approx(3)

    def test_successful_commands_report_true(self, engine) -> None:
        engine.load("/music/a.mp3")
        assert engine.play() is True
        assert engine.pause() is True


class TestVolume:
    """Volume stepping and clamping."""

    def test_initial_volume_forwarded_as_fraction(self, sink, clock) -> None:
        engine = PlaybackEngine(sink, volume=70, clock=clock)
        assert engine.volume == 70
        assert sink.gain == pytest.approx(0.7)

    def test_initial_volume_is_clamped(self, sink, clock) -> None:
        assert PlaybackEngine(sink, volume=250, clock=clock).volume == 100
        assert PlaybackEngine(sink, volume=-5, clock=clock).volume == 0

    def test_volume_up_saturates_at_100(self, sink, clock) -> None:
        engine = PlaybackEngine(sink, volume=95, clock=clock)
        for _ in range(3):
            engine.volume_up()
        assert engine.volume == 100
        assert sink.gain == pytest.approx(1.0)

    def test_volume_down_saturates_at_0(self, sink, clock) -> None:
        engine = PlaybackEngine(sink, volume=5, clock=clock)
        for _ in range(2):
            engine.volume_down()
        assert engine.volume == 0
        assert sink.gain == pytest.approx(0.0)

    def test_volume_step_is_ten(self, engine, sink) -> None:
        assert engine.volume_up() == 60
        assert sink.gain == pytest.approx(0.6)
        assert engine.volume_down() == 50


class TestQueries:
    """Derived queries: whole seconds, progress ratio, idle detection."""

    def test_position_seconds_truncates(self, engine, clock) -> None:
        engine.load("/music/c.flac")
        engine.play()
        clock.advance(61.9)
        assert engine.position_seconds() == (61, 95)

    def test_position_seconds_unknown_duration_is_zero(self, engine, clock) -> None:
        engine.load("/music/mystery.ogg")
        engine.play()
        clock.advance(4)
        assert engine.position_seconds() == (4, 0)

    def test_progress_ratio(self, engine, clock) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        clock.advance(45)
        assert engine.progress_ratio() == pytest.approx(0.25)

    def test_progress_ratio_capped_at_one(self, engine, clock) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        clock.advance(500)
        assert engine.progress_ratio() == 1.0

    def test_progress_ratio_without_duration_is_zero(self, engine, clock) -> None:
        engine.load("/music/mystery.ogg")
        engine.play()
        clock.advance(30)
        assert engine.progress_ratio() == 0.0

    def test_is_idle_reflects_device_queue(self, engine) -> None:
        assert engine.is_idle()
        engine.load("/music/a.mp3")
        assert not engine.is_idle()

    def test_stop_clears_queue_and_record(self, engine, sink, clock) -> None:
        engine.load("/music/a.mp3")
        engine.play()
        clock.advance(9)

        engine.stop()
        assert engine.current_position() == 0.0
        assert engine.total_duration() is None
        assert engine.loaded_path is None
        assert engine.is_idle()

    def test_close_releases_sink(self, engine, sink) -> None:
        engine.close()
        assert sink.closed
