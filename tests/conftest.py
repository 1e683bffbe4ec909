"""Shared fakes for stop rule tests: PCM chunks, a manual clock and a scripted recorder."""

import threading

import numpy as np
import pytest

CHUNK_SAMPLES = 800  # 50ms @ 16kHz


def make_chunk(amplitude: int = 0, samples: int = CHUNK_SAMPLES) -> bytes:
    """Constant-magnitude square wave: RMS == amplitude exactly."""
    if amplitude == 0:
        return np.zeros(samples, dtype='<i2').tobytes()
    signs = np.where(np.arange(samples) % 2 == 0, 1, -1)
    return (signs * amplitude).astype('<i2').tobytes()


def level_of(amplitude: int) -> float:
    return amplitude / 32767


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


class FakeRecorder:
    """
    Scripted chunk source.

    Hands out the scripted items in order (None items simulate "no chunk
    ready"), advancing the clock by ``chunk_ms`` for each real chunk. Stops
    recording once the script is exhausted, unless ``keep_recording`` is set,
    in which case it keeps answering None.
    """

    def __init__(self, items, clock=None, chunk_ms: float = 50, keep_recording: bool = False):
        self.items = list(items)
        self.clock = clock
        self.chunk_ms = chunk_ms
        self.keep_recording = keep_recording
        self.pulls = 0
        self.delivered = 0
        self.first_pull = threading.Event()
        self._lock = threading.Lock()

    @property
    def is_recording(self) -> bool:
        with self._lock:
            return self.keep_recording or self.pulls < len(self.items)

    def get_audio_data_chunk(self):
        self.first_pull.set()
        with self._lock:
            if self.pulls >= len(self.items):
                return None
            item = self.items[self.pulls]
            self.pulls += 1
        if item is not None:
            self.delivered += 1
            if self.clock is not None:
                self.clock.advance_ms(self.chunk_ms)
        return item


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def chunk():
    return make_chunk


@pytest.fixture
def recorder_factory(clock):
    def build(items, chunk_ms: float = 50, keep_recording: bool = False):
        return FakeRecorder(items, clock=clock, chunk_ms=chunk_ms, keep_recording=keep_recording)
    return build
