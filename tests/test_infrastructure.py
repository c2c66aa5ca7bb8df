"""Tests for the provider adapters, using mocked SDK clients and transports."""

from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import assemblyai as aai
import httpx
import pytest
from google.genai import errors

from voice_relay.exceptions import (
    AnalysisServiceError,
    RemoteFetchFailed,
    TranscriptionServiceError,
    UploadTooLarge,
)
from voice_relay.infrastructure import (
    AssemblyAITranscriber,
    GeminiLLMService,
    HttpxRemoteFetcher,
)

AUDIO_PATH = Path("/tmp/1700000000000-abcdef123456-clip.wav")


def _fetcher(handler) -> HttpxRemoteFetcher:
    return HttpxRemoteFetcher(httpx.Client(transport=httpx.MockTransport(handler)))


def test_fetcher_returns_body_and_metadata():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"audio-bytes", headers={"content-type": "audio/ogg"})

    media = _fetcher(handler).fetch("https://cdn.example.com/a/voice.ogg?token=1", max_bytes=1024)

    assert media.data == b"audio-bytes"
    assert media.content_type == "audio/ogg"
    assert media.file_name == "voice.ogg"


def test_fetcher_rejects_error_status():
    fetcher = _fetcher(lambda request: httpx.Response(403, content=b"denied"))

    with pytest.raises(RemoteFetchFailed) as exc_info:
        fetcher.fetch("https://cdn.example.com/private.wav", max_bytes=1024)

    assert exc_info.value.status == 403


def test_fetcher_wraps_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(RemoteFetchFailed) as exc_info:
        _fetcher(handler).fetch("https://slow.example.com/clip.wav", max_bytes=1024)

    assert exc_info.value.status is None
    assert isinstance(exc_info.value.cause, httpx.ConnectTimeout)


def test_fetcher_enforces_size_limit():
    fetcher = _fetcher(lambda request: httpx.Response(200, content=b"x" * 2048))

    with pytest.raises(UploadTooLarge):
        fetcher.fetch("https://cdn.example.com/big.wav", max_bytes=1024)


def test_assemblyai_returns_text():
    transcriber = MagicMock()
    transcriber.transcribe.return_value = SimpleNamespace(
        id="tr_1", status=aai.TranscriptStatus.completed, text="hello", error=None
    )

    text = AssemblyAITranscriber(transcriber).transcribe(AUDIO_PATH, "clip.wav", "audio/wav", "universal")

    assert text == "hello"
    args, kwargs = transcriber.transcribe.call_args
    assert args[0] == str(AUDIO_PATH)
    assert isinstance(kwargs["config"], aai.TranscriptionConfig)


def test_assemblyai_error_status_is_surfaced():
    transcriber = MagicMock()
    transcriber.transcribe.return_value = SimpleNamespace(
        id="tr_2", status=aai.TranscriptStatus.error, text=None, error="File does not appear to contain audio"
    )

    with pytest.raises(TranscriptionServiceError) as exc_info:
        AssemblyAITranscriber(transcriber).transcribe(AUDIO_PATH, "clip.wav", "audio/wav", "universal")

    assert exc_info.value.message == "File does not appear to contain audio"
    assert exc_info.value.provider_status == "error"
    assert exc_info.value.provider_code == "tr_2"


def test_assemblyai_sdk_exception_is_wrapped():
    transcriber = MagicMock()
    transcriber.transcribe.side_effect = RuntimeError("connection reset")

    with pytest.raises(TranscriptionServiceError) as exc_info:
        AssemblyAITranscriber(transcriber).transcribe(AUDIO_PATH, "clip.wav", "audio/wav", "universal")

    assert "connection reset" in exc_info.value.message
    assert isinstance(exc_info.value.cause, RuntimeError)


def test_gemini_returns_reply_text():
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(text='{"summary": "s"}')

    reply = GeminiLLMService(client).complete("prompt", "gemini-test")

    assert reply == '{"summary": "s"}'
    kwargs = client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert kwargs["config"]["response_mime_type"] == "application/json"


def test_gemini_api_error_keeps_provider_details():
    client = MagicMock()
    client.models.generate_content.side_effect = errors.ClientError(
        429,
        {"error": {"code": 429, "message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}},
    )

    with pytest.raises(AnalysisServiceError) as exc_info:
        GeminiLLMService(client).complete("prompt", "gemini-test")

    assert exc_info.value.provider_status == 429
    assert exc_info.value.provider_code == "RESOURCE_EXHAUSTED"
    assert "Resource exhausted" in exc_info.value.message


def test_gemini_empty_reply_is_an_error():
    client = MagicMock()
    client.models.generate_content.return_value = SimpleNamespace(text=None)

    with pytest.raises(AnalysisServiceError):
        GeminiLLMService(client).complete("prompt", "gemini-test")


def test_fetcher_wraps_invalid_urls():
    fetcher = _fetcher(lambda request: httpx.Response(200, content=b"audio"))

    with pytest.raises(RemoteFetchFailed) as exc_info:
        fetcher.fetch("https://", max_bytes=1024)

    assert exc_info.value.status is None
    assert isinstance(exc_info.value.cause, (httpx.InvalidURL, httpx.HTTPError))
