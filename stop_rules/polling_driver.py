import time
from typing import Callable

import config
from .adaptive_silence import AdaptiveSilenceDetector
from .interfaces import AudioChunkSource
from .logging_utils import setup_logger, log_debug

module_logger = setup_logger(__name__)


class DetectionCancelled(Exception):
    """Raised on the worker thread when a detection session is cancelled."""


def poll_until_verdict(
    recorder: AudioChunkSource,
    detector: AdaptiveSilenceDetector,
    is_cancelled: Callable[[], bool],
    poll_interval: float = config.STOP_RULE_POLL_INTERVAL,
    chunk_dump=None,
    logger=None,
) -> bool:
    """
    Pull chunks from the recorder until the detector reaches a verdict.

    Runs synchronously; callers put it on a worker thread. Chunks are fed
    one at a time in arrival order. Stops when the detector is terminal or
    the recorder is no longer recording, whichever comes first.

    Args:
        recorder: Chunk source (non-blocking pull)
        detector: Fresh or reset detector for this session
        is_cancelled: Checked once per iteration
        poll_interval: Seconds to yield when no chunk is ready
        chunk_dump: Optional dump receiving every chunk read
        logger: Logger for session messages (defaults to the module logger)

    Returns:
        detector.sound_detected at exit

    Raises:
        DetectionCancelled: if is_cancelled() turns true first
    """
    logger = logger or module_logger
    chunks = 0
    while recorder.is_recording:
        if is_cancelled():
            raise DetectionCancelled(f"cancelled after {chunks} chunks")

        chunk = recorder.get_audio_data_chunk()
        if chunk is None:
            time.sleep(poll_interval)
            continue

        chunks += 1
        if chunk_dump is not None:
            chunk_dump.write(chunk)
        if detector.process_chunk(chunk):
            log_debug(logger, f"Verdict after {chunks} chunks: {detector.verdict}")
            return detector.verdict

    log_debug(logger, f"Recorder stopped after {chunks} chunks, sound detected: {detector.sound_detected}")
    return detector.sound_detected
