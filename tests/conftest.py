"""Shared fixtures and fake provider implementations."""

from __future__ import annotations

import os
from pathlib import Path

os.environ.setdefault("TRACING_ENABLED", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from voice_relay.config import (  # noqa: E402
    AppConfig,
    AssemblyAIConfig,
    GeminiConfig,
    StagingConfig,
    UploadConfig,
)
from voice_relay.dependencies import (  # noqa: E402
    get_config,
    get_llm_service,
    get_remote_fetcher,
    get_transcription_service,
)
from voice_relay.domain.models import FetchedMedia  # noqa: E402
from voice_relay.infrastructure.interfaces import (  # noqa: E402
    LLMService,
    RemoteFetcher,
    TranscriptionService,
)
from voice_relay.main import app  # noqa: E402

AUDIO_BYTES = b"RIFF\x24\x00\x00\x00WAVEfmt \x10\x00\x00\x00fake-audio-frames"


class FakeTranscriptionService(TranscriptionService):
    """Records every staged file it sees and returns canned text."""

    def __init__(self, text: str = "The patient said they slept well this week.", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[dict] = []

    def transcribe(self, audio_path: Path, file_name: str, content_type: str, model: str) -> str:
        self.calls.append(
            {
                "path": audio_path,
                "existed": audio_path.exists(),
                "data": audio_path.read_bytes(),
                "file_name": file_name,
                "content_type": content_type,
                "model": model,
            }
        )
        if self.error is not None:
            raise self.error
        return self.text


class FakeLLMService(LLMService):
    """Returns a canned reply or raises a canned error."""

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[tuple[str, str]] = []

    def complete(self, prompt: str, model: str) -> str:
        self.prompts.append((prompt, model))
        if self.error is not None:
            raise self.error
        return self.reply


class FakeFetcher(RemoteFetcher):
    """Serves FetchedMedia (or raises) per URL."""

    def __init__(self, responses: dict[str, FetchedMedia | Exception] | None = None):
        self.responses = responses or {}
        self.calls: list[str] = []

    def fetch(self, url: str, max_bytes: int) -> FetchedMedia:
        self.calls.append(url)
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "staging"
    directory.mkdir()
    return directory


@pytest.fixture
def app_config(staging_dir: Path) -> AppConfig:
    return AppConfig(
        assemblyai=AssemblyAIConfig(api_key="test-assemblyai-key", speech_model="test-stt"),
        gemini=GeminiConfig(api_key="test-gemini-key", model_name="test-llm"),
        upload=UploadConfig(max_bytes=1024 * 1024),
        staging=StagingConfig(directory=staging_dir),
    )


@pytest.fixture
def transcription_service() -> FakeTranscriptionService:
    return FakeTranscriptionService()


@pytest.fixture
def llm_service() -> FakeLLMService:
    return FakeLLMService()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def client(app_config, transcription_service, llm_service, fetcher):
    """Test client with every external collaborator replaced by a fake."""
    app.dependency_overrides[get_config] = lambda: app_config
    app.dependency_overrides[get_transcription_service] = lambda: transcription_service
    app.dependency_overrides[get_llm_service] = lambda: llm_service
    app.dependency_overrides[get_remote_fetcher] = lambda: fetcher

    yield TestClient(app)

    app.dependency_overrides.clear()
