"""Domain layer exports."""

from voice_relay.domain.models import (
    AnalysisOutcome,
    AnalysisResult,
    ErrorBody,
    FetchedMedia,
    MultipartSource,
    ProcessResult,
    RawBodySource,
    RemoteUrlSource,
    StagedResource,
    TranscriptAnalysis,
    TranscriptionResult,
    UploadPayload,
    UploadSource,
)

__all__ = [
    "AnalysisOutcome",
    "AnalysisResult",
    "ErrorBody",
    "FetchedMedia",
    "MultipartSource",
    "ProcessResult",
    "RawBodySource",
    "RemoteUrlSource",
    "StagedResource",
    "TranscriptAnalysis",
    "TranscriptionResult",
    "UploadPayload",
    "UploadSource",
]
