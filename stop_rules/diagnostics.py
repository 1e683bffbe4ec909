"""
Diagnostic chunk dump.

Writes every chunk the polling driver reads to a 16-bit PCM WAV so a
misbehaving silence detection can be listened to afterwards. The dump is
owned by a single detection session and always closed when it ends.

Usage:

    with open_chunk_dump(enabled=True, directory="/tmp/dumps") as dump:
        dump.write(chunk)
"""

import os
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

import numpy as np
import soundfile as sf

import config
from .logging_utils import setup_logger, log_debug

logger = setup_logger(__name__)


class ChunkDump:
    """Appends raw PCM chunks to a WAV file."""

    def __init__(self, path: str, sample_rate: int = config.DIAGNOSTIC_SAMPLE_RATE,
                 channels: int = config.DIAGNOSTIC_CHANNELS):
        self.path = path
        self.channels = channels
        self.chunk_count = 0
        self._file: Optional[sf.SoundFile] = sf.SoundFile(
            path, mode='w', samplerate=sample_rate, channels=channels,
            subtype='PCM_16', format='WAV'
        )

    @property
    def closed(self) -> bool:
        return self._file is None

    def write(self, chunk: bytes) -> None:
        if self._file is None:
            raise ValueError(f"Chunk dump already closed: {self.path}")
        samples = np.frombuffer(chunk, dtype='<i2')
        if self.channels > 1:
            if len(samples) % self.channels:
                raise ValueError(f"Chunk of {len(samples)} samples is not a whole number "
                                 f"of {self.channels}-channel frames")
            samples = samples.reshape(-1, self.channels)
        self._file.write(samples)
        self.chunk_count += 1

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            log_debug(logger, f"Chunk dump closed: {self.path} ({self.chunk_count} chunks)")


class NullChunkDump:
    """Stand-in used when dumping is disabled."""

    path = None
    chunk_count = 0
    closed = True

    def write(self, chunk: bytes) -> None:
        pass

    def close(self) -> None:
        pass


def dump_file_path(directory: str) -> str:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    return os.path.join(directory, f"silence_detection_{stamp}.wav")


@contextmanager
def open_chunk_dump(
    enabled: bool = config.DIAGNOSTIC_DUMP_ENABLED,
    directory: str = config.DIAGNOSTIC_DUMP_DIR,
    sample_rate: int = config.DIAGNOSTIC_SAMPLE_RATE,
    channels: int = config.DIAGNOSTIC_CHANNELS,
) -> Iterator:
    """
    Scoped chunk dump for one detection session.

    Yields:
        ChunkDump when enabled, NullChunkDump otherwise
    """
    if not enabled:
        yield NullChunkDump()
        return

    os.makedirs(directory, exist_ok=True)
    dump = ChunkDump(dump_file_path(directory), sample_rate=sample_rate, channels=channels)
    log_debug(logger, f"Chunk dump opened: {dump.path}")
    try:
        yield dump
    finally:
        dump.close()
