"""Custom exceptions for the voice-relay service.

Every error carries a ``kind`` discriminant and a structured payload. The
mapping to HTTP status codes lives in ``voice_relay.error_handlers``.
"""


class RelayError(Exception):
    """Base class for all errors surfaced to callers."""

    kind = "relay_error"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        provider_status: int | str | None = None,
        provider_code: int | str | None = None,
        cause: Exception | None = None,
    ):
        self.message = message
        self.hint = hint
        self.provider_status = provider_status
        self.provider_code = provider_code
        self.cause = cause
        super().__init__(message)


class IngestError(RelayError):
    """Raised when the caller's upload cannot be turned into a payload."""

    kind = "ingest_error"


class MissingFileField(IngestError):
    """Raised when a multipart request has no file part under the expected name."""

    kind = "missing_file_field"

    def __init__(self, field_name: str = "file"):
        self.field_name = field_name
        super().__init__(
            "No audio file uploaded",
            hint=f"Send the audio as a multipart file field named '{field_name}'",
        )


class MissingFileUrl(IngestError):
    """Raised when a JSON request does not carry a file_url."""

    kind = "missing_file_url"

    def __init__(self):
        super().__init__(
            "JSON body is missing 'file_url'",
            hint='Send a body like {"file_url": "https://...", "file_name": "clip.m4a"}',
        )


class MalformedJsonBody(IngestError):
    """Raised when a request declared as JSON cannot be decoded."""

    kind = "malformed_json_body"

    def __init__(self, cause: Exception | None = None):
        super().__init__(
            "Request body is not valid JSON",
            hint='Send a body like {"file_url": "https://..."}',
            cause=cause,
        )


class EmptyBody(IngestError):
    """Raised when the uploaded audio has zero bytes."""

    kind = "empty_body"

    def __init__(self):
        super().__init__("Uploaded audio is empty")


class UploadTooLarge(IngestError):
    """Raised when the uploaded audio exceeds the configured size limit."""

    kind = "upload_too_large"

    def __init__(self, limit_bytes: int):
        self.limit_bytes = limit_bytes
        super().__init__(f"Uploaded audio exceeds the {limit_bytes} byte limit")


class RemoteFetchFailed(IngestError):
    """Raised when the audio referenced by file_url cannot be downloaded."""

    kind = "remote_fetch_failed"

    def __init__(
        self,
        url: str,
        status: int | None = None,
        reason: str | None = None,
        cause: Exception | None = None,
    ):
        self.url = url
        self.status = status
        detail = reason or (f"HTTP {status}" if status is not None else "request failed")
        super().__init__(
            f"Failed to fetch audio from '{url}': {detail}",
            provider_status=status,
            cause=cause,
        )


class StagingError(RelayError):
    """Raised when the audio cannot be written to a temporary file."""

    kind = "staging_error"

    def __init__(self, path: str, cause: Exception | None = None):
        self.path = path
        super().__init__(f"Failed to stage audio at '{path}'", cause=cause)


class TranscriptionServiceError(RelayError):
    """Raised when the speech-to-text provider reports a failure."""

    kind = "transcription_failed"


class AnalysisServiceError(RelayError):
    """Raised when the analysis provider call fails."""

    kind = "analysis_failed"


class ConfigurationError(RelayError):
    """Raised when a required setting, such as a credential, is missing."""

    kind = "configuration_error"

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(
            "Service unavailable: required configuration is missing",
            hint=f"Set the {setting} environment variable",
        )
