import logging

import pytest

from stop_rules.adaptive_silence import (
    AdaptiveSilenceDetector,
    DetectorState,
    SilenceRuleConfig,
    TerminalReason,
)
from conftest import FakeClock, make_chunk, level_of

AMBIENT = 300   # ~0.0092 normalized, above the 0.005 minimum
QUIET = 250
LOUD = 5000


def build_detector(ratio=2.0, duration_ms=200):
    clock = FakeClock()
    detector = AdaptiveSilenceDetector(
        SilenceRuleConfig(threshold_ratio=ratio, silence_duration_ms=duration_ms),
        clock=clock,
    )
    return detector, clock


def feed(detector, clock, amplitude, ms=50):
    clock.advance_ms(ms)
    return detector.process_chunk(make_chunk(amplitude))


def test_config_rejects_ratio_below_one():
    with pytest.raises(ValueError):
        SilenceRuleConfig(threshold_ratio=0.5, silence_duration_ms=100)


def test_config_rejects_negative_duration():
    with pytest.raises(ValueError):
        SilenceRuleConfig(threshold_ratio=2.0, silence_duration_ms=-1)


def test_config_accepts_boundaries():
    rule_config = SilenceRuleConfig(threshold_ratio=1.0, silence_duration_ms=0)
    assert rule_config.threshold_ratio == 1.0


def test_zero_filled_chunks_are_skipped():
    detector, clock = build_detector()

    for _ in range(20):
        assert feed(detector, clock, 0) is False

    assert detector.state is DetectorState.AWAITING_VALID_DATA
    assert detector.noise_level == 0.0
    assert detector.window.first_noise_time is None
    assert detector.readings_complete is False


def test_first_ready_chunk_sets_floor_and_stamps_time():
    detector, clock = build_detector()
    feed(detector, clock, 0)

    feed(detector, clock, AMBIENT)

    assert detector.state is DetectorState.MONITORING
    assert detector.noise_level == pytest.approx(level_of(AMBIENT))
    assert detector.window.first_noise_time == clock.now
    assert detector.window.last_sound_time is None


def test_quiet_calibration_clamped_to_minimum():
    detector, clock = build_detector()

    feed(detector, clock, 20)

    assert detector.noise_level == 0.005


def test_calibration_happens_once():
    detector, clock = build_detector(duration_ms=10_000)
    feed(detector, clock, AMBIENT)
    first_time = detector.window.first_noise_time

    feed(detector, clock, 1000)
    feed(detector, clock, AMBIENT)

    assert detector.window.first_noise_time == first_time
    assert detector.noise_level == pytest.approx(level_of(AMBIENT))


def test_silence_from_start_reports_false():
    detector, clock = build_detector(duration_ms=200)
    feed(detector, clock, AMBIENT)

    results = [feed(detector, clock, QUIET) for _ in range(4)]

    assert results == [False, False, False, True]
    assert detector.state is DetectorState.TERMINAL
    assert detector.terminal_reason is TerminalReason.NO_SOUND
    assert detector.verdict is False


def test_silence_after_sound_reports_true():
    detector, clock = build_detector(duration_ms=200)
    feed(detector, clock, AMBIENT)

    assert feed(detector, clock, LOUD) is False
    assert detector.sound_detected is True
    assert detector.window.last_sound_time == clock.now

    results = [feed(detector, clock, QUIET) for _ in range(4)]

    assert results == [False, False, False, True]
    assert detector.terminal_reason is TerminalReason.SILENCE_AFTER_SOUND
    assert detector.verdict is True


def test_sound_restarts_silence_timer():
    detector, clock = build_detector(duration_ms=200)
    feed(detector, clock, AMBIENT)
    feed(detector, clock, LOUD)
    feed(detector, clock, QUIET)
    feed(detector, clock, QUIET)
    feed(detector, clock, QUIET)

    assert feed(detector, clock, LOUD) is False
    assert [feed(detector, clock, QUIET) for _ in range(3)] == [False, False, False]
    assert feed(detector, clock, QUIET) is True


def test_reading_exactly_at_threshold_is_silence():
    detector, clock = build_detector(ratio=2.0, duration_ms=10_000)
    feed(detector, clock, 1000)

    feed(detector, clock, 2000)

    assert detector.sound_detected is False


def test_zero_duration_terminates_on_first_quiet_chunk():
    detector, clock = build_detector(duration_ms=0)
    feed(detector, clock, AMBIENT)

    assert feed(detector, clock, AMBIENT, ms=0) is True
    assert detector.verdict is False


def test_floor_tracks_quieter_ambient():
    detector, clock = build_detector(duration_ms=10_000)
    feed(detector, clock, 1000)

    feed(detector, clock, 600)
    feed(detector, clock, 800)
    feed(detector, clock, 400)

    assert detector.noise_level == pytest.approx(level_of(400))


def test_floor_never_increases():
    detector, clock = build_detector(duration_ms=10_000)
    feed(detector, clock, 1000)

    previous = detector.noise_level
    for amplitude in [900, 5000, 700, 20000, 750, 600, 30]:
        feed(detector, clock, amplitude)
        assert detector.noise_level <= previous
        assert detector.noise_level >= 0.005
        previous = detector.noise_level


def test_terminal_state_is_sticky():
    detector, clock = build_detector(duration_ms=0)
    feed(detector, clock, AMBIENT)
    feed(detector, clock, AMBIENT)

    assert feed(detector, clock, LOUD) is True
    assert detector.sound_detected is False


def test_reset_clears_session():
    detector, clock = build_detector(duration_ms=0)
    feed(detector, clock, AMBIENT)
    feed(detector, clock, LOUD)
    feed(detector, clock, AMBIENT)

    detector.reset()

    assert detector.state is DetectorState.AWAITING_VALID_DATA
    assert detector.noise_level == 0.0
    assert detector.sound_detected is False
    assert detector.window.first_noise_time is None
    assert detector.window.last_sound_time is None
    assert detector.terminal_reason is None


def test_malformed_chunk_after_calibration_raises():
    detector, clock = build_detector()
    feed(detector, clock, AMBIENT)

    with pytest.raises(ValueError):
        detector.process_chunk(b'\x01\x02\x03')


def test_debug_detector_after_quiet_one_logs_at_debug():
    AdaptiveSilenceDetector(SilenceRuleConfig(threshold_ratio=2.0, silence_duration_ms=100))

    detector = AdaptiveSilenceDetector(SilenceRuleConfig(threshold_ratio=2.0, silence_duration_ms=100),
                                       debug=True)

    assert detector.logger.isEnabledFor(logging.DEBUG)


def test_config_rejects_nan_ratio():
    with pytest.raises(ValueError):
        SilenceRuleConfig(threshold_ratio=float('nan'), silence_duration_ms=100)
