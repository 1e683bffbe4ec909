import config


def readings_complete(buffer: bytes, check_bytes: int = config.READINESS_CHECK_BYTES) -> bool:
    """
    Check whether a chunk carries real audio yet.

    The first buffers after capture starts are zero-filled, followed by one
    that is only partly filled from the front. Summing the leading raw bytes
    rejects both, so the noise floor is measured on real ambient sound.
    """
    return sum(buffer[:check_bytes]) > 0


class NoiseFloor:
    """
    Adaptive noise floor estimate (normalized RMS).

    A level of 0 means uncalibrated. Once calibrated the floor never goes
    below ``min_noise`` and only moves down, towards quieter ambient readings.
    """

    def __init__(self, min_noise: float = config.MIN_NOISE_LEVEL):
        if min_noise <= 0:
            raise ValueError(f"min_noise must be positive, got {min_noise}")
        self.min_noise = float(min_noise)
        self.level = 0.0

    @property
    def is_calibrated(self) -> bool:
        return self.level > 0

    def calibrate(self, level: float) -> float:
        """Set the initial floor from the first valid reading."""
        self.level = max(level, self.min_noise)
        return self.level

    def adapt(self, level: float) -> bool:
        """
        Lower the floor to a quieter valid reading.

        Returns:
            True if the floor moved
        """
        if self.min_noise < level < self.level:
            self.level = level
            return True
        return False

    def reset(self) -> None:
        self.level = 0.0
