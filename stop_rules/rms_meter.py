"""
RMS meter for raw PCM chunks.

Converts one buffer of interleaved little-endian int16 samples into a
loudness value normalized to [0, 1] by the largest positive sample (32767).
"""

import numpy as np

MAX_SAMPLE_VALUE = 32767
BYTES_PER_SAMPLE = 2


def pcm_to_samples(buffer: bytes) -> np.ndarray:
    """
    View a PCM buffer as int16 samples.

    Raises:
        ValueError: if the buffer is empty or has an odd length
    """
    if len(buffer) < BYTES_PER_SAMPLE:
        raise ValueError(f"PCM buffer too short: {len(buffer)} bytes")
    if len(buffer) % BYTES_PER_SAMPLE:
        raise ValueError(f"PCM buffer has odd length: {len(buffer)} bytes")
    return np.frombuffer(buffer, dtype='<i2')


def calculate_normalized_rms(buffer: bytes) -> float:
    """
    Root-mean-square level of a chunk, normalized to [0, 1].

    Args:
        buffer: Raw 16-bit signed little-endian PCM (at least one sample)

    Returns:
        Normalized RMS level
    """
    samples = pcm_to_samples(buffer).astype(np.float64)
    rms = float(np.sqrt(np.mean(samples ** 2)))
    # -32768 squares slightly past full scale
    return min(rms / MAX_SAMPLE_VALUE, 1.0)
