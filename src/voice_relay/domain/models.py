"""Domain models for the voice-relay service."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from voice_relay.exceptions import RelayError


class MultipartSource(BaseModel, frozen=True):
    """Audio received as the ``file`` part of a multipart form."""

    kind: Literal["multipart"] = "multipart"
    data: bytes
    file_name: str | None = None
    content_type: str | None = None


class RemoteUrlSource(BaseModel, frozen=True):
    """Audio referenced by URL inside a JSON envelope."""

    kind: Literal["remote_url"] = "remote_url"
    file_url: str
    file_name: str | None = None
    content_type: str | None = None


class RawBodySource(BaseModel, frozen=True):
    """Audio received as the whole request body."""

    kind: Literal["raw_body"] = "raw_body"
    data: bytes
    content_type: str | None = None


UploadSource = MultipartSource | RemoteUrlSource | RawBodySource


class FetchedMedia(BaseModel, frozen=True):
    """Bytes and metadata downloaded from a remote URL."""

    data: bytes
    content_type: str | None = None
    file_name: str | None = None


class UploadPayload(BaseModel, frozen=True):
    """Normalized audio upload, independent of how it was received."""

    data: bytes
    file_name: str
    content_type: str

    @property
    def size(self) -> int:
        return len(self.data)


class StagedResource(BaseModel, frozen=True):
    """A request-scoped temporary file holding the upload bytes."""

    path: Path
    file_name: str
    content_type: str
    extension: str


class TranscriptionResult(BaseModel, frozen=True):
    """Result of a transcription operation."""

    text: str
    model: str
    elapsed_ms: float
    characters: int
    file_name: str
    content_type: str


class TranscriptAnalysis(BaseModel):
    """Structured analysis the LLM is asked to return for a transcript."""

    summary: str
    sentiment: str
    sentiment_score: float = Field(ge=-1.0, le=1.0)
    tone: list[str] = []
    risk_flags: list[str] = []
    notable_quotes: list[str] = []


class AnalysisResult(BaseModel, frozen=True):
    """
    Output of the analysis call.

    Exactly one of ``parsed`` and ``raw_text`` is set: ``parsed`` when the
    reply matched the TranscriptAnalysis schema, ``raw_text`` otherwise.
    """

    parsed: TranscriptAnalysis | None = None
    raw_text: str | None = None
    model: str
    elapsed_ms: float


class AnalysisOutcome(BaseModel, frozen=True):
    """Analysis result, or the reason it was skipped."""

    result: AnalysisResult | None = None
    warning: str | None = None


class ErrorBody(BaseModel, frozen=True):
    """Serializable description of a RelayError."""

    error: str
    kind: str
    hint: str | None = None
    status: int | str | None = None
    code: int | str | None = None

    @classmethod
    def from_error(cls, error: RelayError) -> "ErrorBody":
        return cls(
            error=error.message,
            kind=error.kind,
            hint=error.hint,
            status=error.provider_status,
            code=error.provider_code,
        )


class ProcessResult(BaseModel, frozen=True):
    """Transcription followed by a best-effort analysis."""

    transcription: TranscriptionResult
    analysis: AnalysisResult | None = None
    warning: str | None = None
    analysis_error: ErrorBody | None = None
