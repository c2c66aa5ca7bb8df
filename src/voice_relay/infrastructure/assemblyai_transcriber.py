"""AssemblyAI implementation of the TranscriptionService interface."""

from pathlib import Path

import assemblyai as aai

from voice_relay.exceptions import TranscriptionServiceError
from voice_relay.infrastructure.interfaces import TranscriptionService
from voice_relay.logging import setup_logging

logger = setup_logging(__name__)


def _provider_detail(error: Exception, attribute: str) -> int | str | None:
    value = getattr(error, attribute, None)
    return value if isinstance(value, (int, str)) else None


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber):
        self._transcriber = transcriber

    def transcribe(
        self,
        audio_path: Path,
        file_name: str,
        content_type: str,
        model: str,
    ) -> str:
        """
        Transcribes a staged audio file using AssemblyAI.

        The SDK uploads the file from disk, then polls until the transcript
        completes or fails.
        """
        try:
            config = aai.TranscriptionConfig(speech_model=model)
            transcript = self._transcriber.transcribe(str(audio_path), config=config)
        except Exception as e:
            logger.exception(
                "AssemblyAI transcription failed",
                extra={"file_name": file_name, "model": model},
            )
            raise TranscriptionServiceError(
                f"AssemblyAI transcription failed: {e}",
                provider_status=_provider_detail(e, "status_code"),
                provider_code=_provider_detail(e, "code"),
                cause=e,
            ) from e

        if transcript.status == aai.TranscriptStatus.error:
            logger.error(
                "AssemblyAI reported a transcription error",
                extra={"file_name": file_name, "transcript_id": transcript.id},
            )
            raise TranscriptionServiceError(
                transcript.error or "Transcription failed",
                provider_status=transcript.status.value,
                provider_code=transcript.id,
            )

        if transcript.text is None:
            raise TranscriptionServiceError(
                "Transcription returned no text",
                provider_status=transcript.status.value,
                provider_code=transcript.id,
            )

        logger.info(
            "Audio transcription successful",
            extra={
                "file_name": file_name,
                "content_type": content_type,
                "transcript_id": transcript.id,
            },
        )
        return transcript.text
