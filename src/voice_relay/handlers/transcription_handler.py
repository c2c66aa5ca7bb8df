"""Handler for turning an upload into a transcript."""

import time
from pathlib import Path

from voice_relay.domain.ingest import normalize_source
from voice_relay.domain.models import TranscriptionResult, UploadSource
from voice_relay.domain.staging import staged_upload
from voice_relay.infrastructure.interfaces import RemoteFetcher, TranscriptionService
from voice_relay.logging import setup_logging

logger = setup_logging(__name__)


class TranscriptionHandler:
    """Orchestrates ingest, staging, and the transcription call."""

    def __init__(
        self,
        transcription_service: TranscriptionService,
        fetcher: RemoteFetcher,
        model: str,
        max_upload_bytes: int,
        staging_dir: Path | None = None,
        max_name_length: int = 64,
    ):
        self._transcription_service = transcription_service
        self._fetcher = fetcher
        self._model = model
        self._max_upload_bytes = max_upload_bytes
        self._staging_dir = staging_dir
        self._max_name_length = max_name_length

    def process(self, source: UploadSource) -> TranscriptionResult:
        """
        Transcribes one upload.

        Args:
            source: The upload as read from the request.

        Returns:
            TranscriptionResult with the text and timing details.

        Raises:
            IngestError: If the upload is empty, too large, or cannot be fetched.
            StagingError: If the temporary file cannot be written.
            TranscriptionServiceError: If the provider reports a failure.
        """
        payload = normalize_source(source, self._fetcher, self._max_upload_bytes)

        with staged_upload(payload, self._staging_dir, self._max_name_length) as staged:
            started = time.perf_counter()
            text = self._transcription_service.transcribe(
                staged.path,
                staged.file_name,
                staged.content_type,
                self._model,
            )
            elapsed_ms = round((time.perf_counter() - started) * 1000, 1)

        logger.info(
            "Transcription completed",
            extra={
                "model": self._model,
                "elapsed_ms": elapsed_ms,
                "characters": len(text),
                "file_name": staged.file_name,
            },
        )

        return TranscriptionResult(
            text=text,
            model=self._model,
            elapsed_ms=elapsed_ms,
            characters=len(text),
            file_name=staged.file_name,
            content_type=staged.content_type,
        )
