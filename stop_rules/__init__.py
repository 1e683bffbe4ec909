"""Adaptive silence stop rules for live PCM recordings."""

from .adaptive_silence import AdaptiveSilenceDetector, SilenceRuleConfig
from .interfaces import AudioChunkSource, StopRule
from .rules import ImmediateStopRule, SilenceIsDetectedStopRule, When, wait_for_stop

__all__ = [
    "AdaptiveSilenceDetector",
    "AudioChunkSource",
    "ImmediateStopRule",
    "SilenceIsDetectedStopRule",
    "SilenceRuleConfig",
    "StopRule",
    "When",
    "wait_for_stop",
]
