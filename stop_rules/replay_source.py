"""
WAV replay source.

Plays a recording back through the AudioChunkSource contract, handing out
fixed-size chunks at the pace they were captured. Useful for tuning the
silence threshold on a real microphone sample without live capture.
"""

import time
from typing import Callable, List, Optional

import numpy as np
import soundfile as sf

import config
from .base_module import BaseModule
from .logging_utils import log_info


class WavReplaySource(BaseModule):
    """File-backed recorder: non-blocking pulls, real-time pacing."""

    def __init__(self, path: str, chunk_ms: int = config.REPLAY_CHUNK_MS,
                 clock: Optional[Callable[[], float]] = None,
                 debug: bool = False, verbose: bool = True):
        super().__init__(__name__, debug=debug, verbose=verbose)
        if chunk_ms <= 0:
            raise ValueError(f"chunk_ms must be positive, got {chunk_ms}")

        samples, sample_rate = sf.read(path, dtype='int16', always_2d=True)
        self.path = path
        self.sample_rate = sample_rate
        self.channels = samples.shape[1]
        self.chunk_ms = chunk_ms
        self.clock = clock or time.monotonic
        self._chunks = self._split(samples, sample_rate, chunk_ms)
        self._index = 0
        self._started_at: Optional[float] = None
        log_info(self.logger, f"Loaded {path}: {len(self._chunks)} chunks of {chunk_ms}ms "
                              f"@ {sample_rate}Hz x{self.channels}")

    @staticmethod
    def _split(samples: np.ndarray, sample_rate: int, chunk_ms: int) -> List[bytes]:
        frames_per_chunk = max(1, int(sample_rate * chunk_ms / 1000))
        interleaved = samples.astype('<i2')
        return [
            interleaved[i:i + frames_per_chunk].tobytes()
            for i in range(0, len(interleaved), frames_per_chunk)
        ]

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    @property
    def is_recording(self) -> bool:
        return self._index < len(self._chunks)

    def get_audio_data_chunk(self) -> Optional[bytes]:
        if not self.is_recording:
            return None

        now = self.clock()
        if self._started_at is None:
            self._started_at = now

        due_at = self._started_at + self._index * self.chunk_ms / 1000.0
        if now < due_at:
            return None

        chunk = self._chunks[self._index]
        self._index += 1
        return chunk

    def stop(self) -> None:
        self._index = len(self._chunks)
