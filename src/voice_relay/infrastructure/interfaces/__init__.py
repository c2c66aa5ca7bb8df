"""Infrastructure interface exports."""

from voice_relay.infrastructure.interfaces.llm_service import LLMService
from voice_relay.infrastructure.interfaces.remote_fetcher import RemoteFetcher
from voice_relay.infrastructure.interfaces.transcription_service import (
    TranscriptionService,
)

__all__ = [
    "LLMService",
    "RemoteFetcher",
    "TranscriptionService",
]
