"""Handler for transcription followed by transcript analysis."""

from voice_relay.domain.analysis_forwarder import AnalysisForwarder
from voice_relay.domain.models import ErrorBody, ProcessResult, UploadSource
from voice_relay.exceptions import AnalysisServiceError
from voice_relay.handlers.transcription_handler import TranscriptionHandler
from voice_relay.logging import setup_logging

logger = setup_logging(__name__)


class PipelineHandler:
    """Runs transcription, then a best-effort analysis of the transcript."""

    def __init__(self, transcription_handler: TranscriptionHandler, forwarder: AnalysisForwarder):
        self._transcription_handler = transcription_handler
        self._forwarder = forwarder

    def process(self, source: UploadSource) -> ProcessResult:
        """
        Transcribes an upload and analyzes the transcript.

        Analysis failures produce a partial result instead of an error.

        Raises:
            IngestError, StagingError, TranscriptionServiceError: As raised by
                the transcription stage.
        """
        transcription = self._transcription_handler.process(source)

        try:
            outcome = self._forwarder.forward(transcription.text)
        except AnalysisServiceError as e:
            logger.warning(
                "Analysis failed, returning transcript only",
                extra={"error": e.message, "provider_status": e.provider_status},
            )
            return ProcessResult(
                transcription=transcription,
                analysis_error=ErrorBody.from_error(e),
            )

        return ProcessResult(
            transcription=transcription,
            analysis=outcome.result,
            warning=outcome.warning,
        )
