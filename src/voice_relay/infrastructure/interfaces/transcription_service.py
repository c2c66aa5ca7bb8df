"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod
from pathlib import Path


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    def transcribe(
        self,
        audio_path: Path,
        file_name: str,
        content_type: str,
        model: str,
    ) -> str:
        """
        Transcribes a staged audio file and returns its text.

        Args:
            audio_path: Path of the staged audio file.
            file_name: Display name of the upload, including its extension.
            content_type: MIME type of the upload.
            model: Provider model identifier.

        Returns:
            The transcript text.

        Raises:
            TranscriptionServiceError: If the provider reports a failure.
        """
        pass
