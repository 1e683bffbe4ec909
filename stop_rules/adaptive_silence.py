import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

import config
from .logging_utils import setup_logger, log_audio, log_debug
from .noise_floor import NoiseFloor, readings_complete
from .rms_meter import calculate_normalized_rms


@dataclass
class SilenceRuleConfig:
    threshold_ratio: float = config.SILENCE_THRESHOLD_RATIO
    silence_duration_ms: int = config.SILENCE_DURATION_MS

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        # Negated so NaN fails too
        if not self.threshold_ratio >= 1:
            raise ValueError(f"threshold_ratio must be >= 1, got {self.threshold_ratio}")
        if not self.silence_duration_ms >= 0:
            raise ValueError(f"silence_duration_ms must be >= 0, got {self.silence_duration_ms}")


class DetectorState(Enum):
    AWAITING_VALID_DATA = "awaiting_valid_data"
    CALIBRATING = "calibrating"
    MONITORING = "monitoring"
    TERMINAL = "terminal"


class TerminalReason(Enum):
    SILENCE_AFTER_SOUND = "silence_after_sound"
    NO_SOUND = "no_sound"


@dataclass
class SilenceWindow:
    first_noise_time: Optional[float] = None
    last_sound_time: Optional[float] = None


class AdaptiveSilenceDetector:
    """
    Silence timer for live recordings.

    Skips zero-filled startup chunks, measures the noise floor on the first
    real chunk, then classifies each chunk as sound or silence relative to
    ``threshold_ratio`` x floor. Reaches TERMINAL once silence has lasted
    ``silence_duration_ms`` since the last sound, or since calibration if no
    sound was ever heard.

    The verdict is ``sound_detected`` at termination, so ending on leading
    silence alone reports False.
    """

    def __init__(self, rule_config: SilenceRuleConfig,
                 clock: Optional[Callable[[], float]] = None,
                 min_noise: float = config.MIN_NOISE_LEVEL,
                 debug: bool = False):
        self.config = rule_config
        self.clock = clock or time.monotonic
        self.logger = setup_logger(__name__, debug=debug)
        self.noise_floor = NoiseFloor(min_noise=min_noise)
        self.window = SilenceWindow()
        self.readings_complete = False
        self.sound_detected = False
        self.state = DetectorState.AWAITING_VALID_DATA
        self.terminal_reason: Optional[TerminalReason] = None

    @property
    def noise_level(self) -> float:
        return self.noise_floor.level

    @property
    def verdict(self) -> bool:
        return self.sound_detected

    def reset(self) -> None:
        """Forget everything from a previous session."""
        self.noise_floor.reset()
        self.window = SilenceWindow()
        self.readings_complete = False
        self.sound_detected = False
        self.state = DetectorState.AWAITING_VALID_DATA
        self.terminal_reason = None

    def process_chunk(self, chunk: bytes) -> bool:
        """
        Feed one chunk, in arrival order.

        Returns:
            True once the detector is TERMINAL
        """
        if self.state is DetectorState.TERMINAL:
            return True

        if self.state is DetectorState.AWAITING_VALID_DATA:
            if readings_complete(chunk):
                self.readings_complete = True
                self.state = DetectorState.CALIBRATING
            else:
                return False

        if self.state is DetectorState.CALIBRATING:
            self._calibrate(chunk)
            return False

        return self._monitor(chunk)

    def _calibrate(self, chunk: bytes) -> None:
        level = calculate_normalized_rms(chunk)
        self.noise_floor.calibrate(level)
        self.window.first_noise_time = self.clock()
        self.state = DetectorState.MONITORING
        log_debug(self.logger, f"Noise floor calibrated: RMS {level:.5f} -> floor {self.noise_level:.5f}")

    def _monitor(self, chunk: bytes) -> bool:
        level = calculate_normalized_rms(chunk)
        self.noise_floor.adapt(level)
        now = self.clock()
        log_debug(self.logger, f"RMS: {level:.5f} | Noise: {self.noise_level:.5f}")

        if level > self.config.threshold_ratio * self.noise_level:
            self.sound_detected = True
            self.window.last_sound_time = now
            log_debug(self.logger, "Sound detected")
            return False

        if self.window.last_sound_time is not None:
            if self._elapsed_ms(self.window.last_sound_time, now) >= self.config.silence_duration_ms:
                self._finish(TerminalReason.SILENCE_AFTER_SOUND)
                log_audio(self.logger, "Silence detected")
                return True
        elif self._elapsed_ms(self.window.first_noise_time, now) >= self.config.silence_duration_ms:
            self._finish(TerminalReason.NO_SOUND)
            log_audio(self.logger, "No sound detected")
            return True

        return False

    def _finish(self, reason: TerminalReason) -> None:
        self.state = DetectorState.TERMINAL
        self.terminal_reason = reason

    @staticmethod
    def _elapsed_ms(since: float, now: float) -> float:
        return (now - since) * 1000.0
