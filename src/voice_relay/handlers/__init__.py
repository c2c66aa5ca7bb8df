"""Request handler exports."""

from voice_relay.handlers.pipeline_handler import PipelineHandler
from voice_relay.handlers.transcription_handler import TranscriptionHandler

__all__ = ["PipelineHandler", "TranscriptionHandler"]
