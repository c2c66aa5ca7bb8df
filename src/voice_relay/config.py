"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel, Field


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI speech-to-text configuration."""

    api_key: str
    speech_model: str = "universal"
    timeout_seconds: float = 300.0


class GeminiConfig(BaseModel, frozen=True):
    """Gemini analysis configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash-lite"
    timeout_seconds: float = 60.0
    min_transcript_chars: int = 10


class FetchConfig(BaseModel, frozen=True):
    """Outbound fetch configuration for URL-based uploads."""

    timeout_seconds: float = 30.0


class UploadConfig(BaseModel, frozen=True):
    """Inbound upload limits."""

    max_bytes: int = Field(default=100 * 1024 * 1024, gt=0)


class StagingConfig(BaseModel, frozen=True):
    """Temporary staging file configuration."""

    directory: Path | None = None
    max_name_length: int = Field(default=64, ge=16)


class ServerConfig(BaseModel, frozen=True):
    """HTTP server configuration."""

    cors_origins: tuple[str, ...] = ("*",)
    tracing_enabled: bool = True
    host: str = "0.0.0.0"
    port: int = 8000


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    assemblyai: AssemblyAIConfig
    gemini: GeminiConfig
    fetch: FetchConfig = FetchConfig()
    upload: UploadConfig = UploadConfig()
    staging: StagingConfig = StagingConfig()
    server: ServerConfig = ServerConfig()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    staging_dir = os.getenv("STAGING_DIR", "")
    return AppConfig(
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            speech_model=os.getenv("TRANSCRIPTION_MODEL", "universal"),
            timeout_seconds=float(os.getenv("ASSEMBLYAI_TIMEOUT_SECONDS", "300")),
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("ANALYSIS_MODEL", "gemini-2.5-flash-lite"),
            timeout_seconds=float(os.getenv("GEMINI_TIMEOUT_SECONDS", "60")),
            min_transcript_chars=int(os.getenv("ANALYSIS_MIN_CHARS", "10")),
        ),
        fetch=FetchConfig(
            timeout_seconds=float(os.getenv("FETCH_TIMEOUT_SECONDS", "30")),
        ),
        upload=UploadConfig(
            max_bytes=int(os.getenv("MAX_UPLOAD_BYTES", str(100 * 1024 * 1024))),
        ),
        staging=StagingConfig(
            directory=Path(staging_dir) if staging_dir else None,
            max_name_length=int(os.getenv("STAGING_MAX_NAME_LENGTH", "64")),
        ),
        server=ServerConfig(
            cors_origins=_env_list("CORS_ORIGINS", "*"),
            tracing_enabled=_env_flag("TRACING_ENABLED", "true"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
        ),
    )
