"""
Protocol Interfaces for Stop Rules

Defines the two contracts the silence detector sits between:
- AudioChunkSource: what the recorder must offer (implemented elsewhere)
- StopRule: what a stop rule offers back to the recorder

Following KISS principle: Simple interfaces, no complex abstractions.
"""

import threading
from typing import Optional, Protocol


class AudioChunkSource(Protocol):
    """Recorder-side contract consumed by stop rules"""

    @property
    def is_recording(self) -> bool:
        """True while capture is active. Polled repeatedly, never pushed."""
        ...

    def get_audio_data_chunk(self) -> Optional[bytes]:
        """
        Pull the next raw chunk without blocking.

        Returns:
            Little-endian 16-bit PCM bytes, or None when nothing new is ready
            (None does not mean end of stream)
        """
        ...


class StopRule(Protocol):
    """Decides whether an in-progress recording should be stopped"""

    async def enforce_stop(
        self,
        recorder: AudioChunkSource,
        cancel_event: Optional[threading.Event] = None,
    ) -> bool:
        """
        Wait for the rule's verdict.

        Args:
            recorder: Source of live audio chunks
            cancel_event: Optional event; setting it aborts the wait

        Returns:
            True if the recorder should stop

        Raises:
            asyncio.CancelledError: if cancelled before a verdict
        """
        ...
