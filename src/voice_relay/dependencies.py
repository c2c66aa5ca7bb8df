"""FastAPI dependency injection configuration."""

from functools import lru_cache
from typing import Annotated

import assemblyai as aai
import httpx
from fastapi import Depends
from google import genai
from google.genai import types as genai_types

from voice_relay.config import AppConfig, load_config
from voice_relay.domain.analysis_forwarder import AnalysisForwarder
from voice_relay.exceptions import ConfigurationError
from voice_relay.handlers import PipelineHandler, TranscriptionHandler
from voice_relay.infrastructure import (
    AssemblyAITranscriber,
    GeminiLLMService,
    HttpxRemoteFetcher,
)
from voice_relay.infrastructure.interfaces import (
    LLMService,
    RemoteFetcher,
    TranscriptionService,
)
from voice_relay.logging import setup_logging

logger = setup_logging(__name__)

_config = load_config()


def get_config() -> AppConfig:
    """Returns the process-wide configuration."""
    return _config


ConfigDep = Annotated[AppConfig, Depends(get_config)]


@lru_cache(maxsize=1)
def _assemblyai_transcriber(api_key: str, timeout_seconds: float) -> AssemblyAITranscriber:
    aai.settings.api_key = api_key
    aai.settings.http_timeout = timeout_seconds
    logger.info("AssemblyAI client initialized", extra={"timeout_seconds": timeout_seconds})
    return AssemblyAITranscriber(aai.Transcriber())


@lru_cache(maxsize=1)
def _gemini_service(api_key: str, timeout_seconds: float) -> GeminiLLMService:
    client = genai.Client(
        api_key=api_key,
        http_options=genai_types.HttpOptions(timeout=int(timeout_seconds * 1000)),
    )
    logger.info("Gemini client initialized", extra={"timeout_seconds": timeout_seconds})
    return GeminiLLMService(client)


@lru_cache(maxsize=1)
def _httpx_fetcher(timeout_seconds: float) -> HttpxRemoteFetcher:
    return HttpxRemoteFetcher(httpx.Client(timeout=timeout_seconds))


def get_transcription_service(config: ConfigDep) -> TranscriptionService:
    """Returns the configured transcription service."""
    if not config.assemblyai.api_key:
        raise ConfigurationError("ASSEMBLYAI_API_KEY")
    return _assemblyai_transcriber(config.assemblyai.api_key, config.assemblyai.timeout_seconds)


def get_llm_service(config: ConfigDep) -> LLMService:
    """Returns the configured analysis LLM service."""
    if not config.gemini.api_key:
        raise ConfigurationError("GEMINI_API_KEY")
    return _gemini_service(config.gemini.api_key, config.gemini.timeout_seconds)


def get_remote_fetcher(config: ConfigDep) -> RemoteFetcher:
    """Returns the fetcher used for URL-based uploads."""
    return _httpx_fetcher(config.fetch.timeout_seconds)


TranscriptionServiceDep = Annotated[TranscriptionService, Depends(get_transcription_service)]
LLMServiceDep = Annotated[LLMService, Depends(get_llm_service)]
RemoteFetcherDep = Annotated[RemoteFetcher, Depends(get_remote_fetcher)]


def get_transcription_handler(
    config: ConfigDep,
    transcription_service: TranscriptionServiceDep,
    fetcher: RemoteFetcherDep,
) -> TranscriptionHandler:
    """Returns a transcription handler wired to the configured services."""
    return TranscriptionHandler(
        transcription_service,
        fetcher,
        model=config.assemblyai.speech_model,
        max_upload_bytes=config.upload.max_bytes,
        staging_dir=config.staging.directory,
        max_name_length=config.staging.max_name_length,
    )


TranscriptionHandlerDep = Annotated[TranscriptionHandler, Depends(get_transcription_handler)]


def get_analysis_forwarder(config: ConfigDep, llm_service: LLMServiceDep) -> AnalysisForwarder:
    """Returns the analysis forwarder wired to the configured LLM."""
    return AnalysisForwarder(
        llm_service,
        model_name=config.gemini.model_name,
        min_transcript_chars=config.gemini.min_transcript_chars,
    )


AnalysisForwarderDep = Annotated[AnalysisForwarder, Depends(get_analysis_forwarder)]


def get_pipeline_handler(
    transcription_handler: TranscriptionHandlerDep,
    forwarder: AnalysisForwarderDep,
) -> PipelineHandler:
    """Returns the transcription-plus-analysis handler."""
    return PipelineHandler(transcription_handler, forwarder)


PipelineHandlerDep = Annotated[PipelineHandler, Depends(get_pipeline_handler)]
