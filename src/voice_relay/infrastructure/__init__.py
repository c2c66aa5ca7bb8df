"""Infrastructure layer exports."""

from voice_relay.infrastructure.assemblyai_transcriber import AssemblyAITranscriber
from voice_relay.infrastructure.gemini_llm import GeminiLLMService
from voice_relay.infrastructure.httpx_fetcher import HttpxRemoteFetcher

__all__ = [
    "AssemblyAITranscriber",
    "GeminiLLMService",
    "HttpxRemoteFetcher",
]
