"""Transcription endpoints."""

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool

from voice_relay.dependencies import ConfigDep, PipelineHandlerDep, TranscriptionHandlerDep
from voice_relay.logging import setup_logging
from voice_relay.request_sources import read_upload_source
from voice_relay.response_models import ProcessResponse, TranscribeResponse

logger = setup_logging(__name__)

router = APIRouter(tags=["transcription"])


@router.post("/transcribe", response_model=TranscribeResponse)
async def transcribe(
    request: Request, config: ConfigDep, handler: TranscriptionHandlerDep
) -> TranscribeResponse:
    """
    Transcribes audio sent as multipart ``file``, a raw body, or a JSON
    ``file_url``.
    """
    source = await read_upload_source(request, config.upload.max_bytes)
    logger.info("Received transcription request", extra={"source": source.kind})

    result = await run_in_threadpool(handler.process, source)

    return TranscribeResponse(**result.model_dump())


@router.post("/process", response_model=ProcessResponse)
async def process(
    request: Request, config: ConfigDep, handler: PipelineHandlerDep
) -> ProcessResponse:
    """Transcribes audio, then analyzes the transcript on a best-effort basis."""
    source = await read_upload_source(request, config.upload.max_bytes)
    logger.info("Received process request", extra={"source": source.kind})

    result = await run_in_threadpool(handler.process, source)

    return ProcessResponse(
        text=result.transcription.text,
        transcription=result.transcription,
        analysis=result.analysis,
        warning=result.warning,
        analysis_error=result.analysis_error,
    )
