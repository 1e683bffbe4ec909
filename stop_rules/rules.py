"""
Stop rules for live recordings.

Two rules share the StopRule contract:
- ImmediateStopRule: stop now, without looking at the audio
- SilenceIsDetectedStopRule: wait until the recording has gone silent

Build them through When:

    rule = When.silence_is_detected(threshold_of=2.0, for_duration=1500)
    should_stop = await rule.enforce_stop(recorder)
"""

import asyncio
import threading
from typing import Callable, Optional

import config
from .adaptive_silence import AdaptiveSilenceDetector, SilenceRuleConfig
from .base_module import BaseModule
from .diagnostics import open_chunk_dump
from .interfaces import AudioChunkSource, StopRule
from .logging_utils import log_debug, log_warning
from .polling_driver import DetectionCancelled, poll_until_verdict


class ImmediateStopRule:
    """Always stops, without inspecting any audio."""

    async def enforce_stop(self, recorder: AudioChunkSource,
                           cancel_event: Optional[threading.Event] = None) -> bool:
        return True


class SilenceIsDetectedStopRule(BaseModule):
    """
    Stops a recording once it has gone silent after real sound.

    Each enforce_stop() call is an independent session: a new detector is
    built, the recorder is polled on a worker thread and the detector's
    verdict is returned. Silence with no sound ever heard ends the session
    with False.
    """

    def __init__(self, threshold_ratio: float, silence_duration_ms: int,
                 poll_interval: float = config.STOP_RULE_POLL_INTERVAL,
                 clock: Optional[Callable[[], float]] = None,
                 dump_enabled: bool = config.DIAGNOSTIC_DUMP_ENABLED,
                 dump_dir: str = config.DIAGNOSTIC_DUMP_DIR,
                 debug: bool = False, verbose: bool = True):
        super().__init__(__name__, debug=debug, verbose=verbose)
        self.config = SilenceRuleConfig(threshold_ratio=threshold_ratio,
                                        silence_duration_ms=silence_duration_ms)
        self.poll_interval = poll_interval
        self.clock = clock
        self.dump_enabled = dump_enabled
        self.dump_dir = dump_dir
        self.last_detector: Optional[AdaptiveSilenceDetector] = None

    async def enforce_stop(self, recorder: AudioChunkSource,
                           cancel_event: Optional[threading.Event] = None) -> bool:
        self.config.validate()
        detector = AdaptiveSilenceDetector(self.config, clock=self.clock, debug=self.debug)
        self.last_detector = detector

        abort = threading.Event()

        def is_cancelled() -> bool:
            return abort.is_set() or (cancel_event is not None and cancel_event.is_set())

        if is_cancelled():
            log_debug(self.logger, "Detect silence canceled before start.")
            raise asyncio.CancelledError()

        worker = asyncio.ensure_future(
            asyncio.to_thread(self._detect_silence, recorder, detector, is_cancelled))
        try:
            return await asyncio.shield(worker)
        except DetectionCancelled:
            log_warning(self.logger, "Detect silence canceled.")
            raise asyncio.CancelledError() from None
        except asyncio.CancelledError:
            # Task cancelled by the caller: the worker must stop polling and
            # release the dump before the cancellation propagates.
            abort.set()
            await asyncio.wait({worker})
            error = worker.exception()
            if error is not None and not isinstance(error, DetectionCancelled):
                log_warning(self.logger, f"Detect silence failed while canceling: {error}")
            log_warning(self.logger, "Detect silence canceled.")
            raise

    def _detect_silence(self, recorder: AudioChunkSource, detector: AdaptiveSilenceDetector,
                        is_cancelled: Callable[[], bool]) -> bool:
        with open_chunk_dump(enabled=self.dump_enabled, directory=self.dump_dir) as dump:
            return poll_until_verdict(recorder, detector, is_cancelled, logger=self.logger,
                                      poll_interval=self.poll_interval, chunk_dump=dump)


class When:
    """Factory for the built-in stop rules."""

    @staticmethod
    def immediately() -> ImmediateStopRule:
        return ImmediateStopRule()

    @staticmethod
    def silence_is_detected(threshold_of: float = config.SILENCE_THRESHOLD_RATIO,
                            for_duration: int = config.SILENCE_DURATION_MS,
                            **kwargs) -> SilenceIsDetectedStopRule:
        """
        Args:
            threshold_of: Noise floor multiplier at or below which audio is silence (>= 1)
            for_duration: Milliseconds of silence required (>= 0)
            **kwargs: Passed to SilenceIsDetectedStopRule
        """
        return SilenceIsDetectedStopRule(threshold_of, for_duration, **kwargs)


async def wait_for_stop(recorder: AudioChunkSource, stop_rule: Optional[StopRule] = None,
                        cancel_event: Optional[threading.Event] = None) -> bool:
    """
    Recorder-side entry point: resolve the rule and await its verdict.

    A missing rule means stop immediately.
    """
    if stop_rule is None:
        stop_rule = When.immediately()
    return await stop_rule.enforce_stop(recorder, cancel_event)
