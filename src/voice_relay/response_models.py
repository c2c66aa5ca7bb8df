"""Response models for the voice-relay API."""

from pydantic import BaseModel

from voice_relay.domain.models import AnalysisResult, ErrorBody, TranscriptionResult


class TranscribeResponse(BaseModel):
    """Response returned by POST /transcribe."""

    text: str
    model: str
    elapsed_ms: float
    characters: int
    file_name: str
    content_type: str


class ProcessResponse(BaseModel):
    """Response returned by POST /process."""

    text: str
    transcription: TranscriptionResult
    analysis: AnalysisResult | None = None
    warning: str | None = None
    analysis_error: ErrorBody | None = None
