"""File extension and MIME type inference for staged uploads."""

import re
from typing import Final

EXTENSION_BY_CONTENT_TYPE: Final[dict[str, str]] = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/webm": "webm",
    "video/webm": "webm",
    "audio/mp4": "m4a",
    "video/mp4": "mp4",
    "audio/ogg": "ogg",
    "audio/flac": "flac",
}

CONTENT_TYPE_BY_EXTENSION: Final[dict[str, str]] = {
    "wav": "audio/wav",
    "mp3": "audio/mpeg",
    "webm": "audio/webm",
    "m4a": "audio/mp4",
    "mp4": "video/mp4",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
}

RECOGNIZED_EXTENSIONS: Final[frozenset[str]] = frozenset(CONTENT_TYPE_BY_EXTENSION)

# Most mobile recorders produce m4a; a guess, not a detection.
DEFAULT_EXTENSION: Final[str] = "m4a"
DEFAULT_FILE_NAME: Final[str] = "upload"
GENERIC_CONTENT_TYPE: Final[str] = "application/octet-stream"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9.\-]")
_DOT_RUNS = re.compile(r"\.{2,}")


def media_type(content_type: str | None) -> str:
    """Returns the lower-cased media type without parameters (``; codecs=...``)."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def _name_extension(file_name: str | None) -> str | None:
    if not file_name or "." not in file_name:
        return None
    extension = file_name.rsplit(".", 1)[1]
    if extension.lower() in RECOGNIZED_EXTENSIONS:
        return extension
    return None


def infer_extension(file_name: str | None, content_type: str | None) -> str:
    """
    Returns a best-guess extension for an upload.

    A recognized extension already present on the file name is kept verbatim
    and wins over the content type. Otherwise the content type is looked up in
    EXTENSION_BY_CONTENT_TYPE, falling back to DEFAULT_EXTENSION.
    """
    from_name = _name_extension(file_name)
    if from_name:
        return from_name
    return EXTENSION_BY_CONTENT_TYPE.get(media_type(content_type), DEFAULT_EXTENSION)


def infer_content_type(extension: str, declared: str | None) -> str:
    """Keeps a specific declared type, otherwise derives one from the extension."""
    declared_type = media_type(declared)
    if declared_type and declared_type != GENERIC_CONTENT_TYPE:
        return declared.strip()
    return CONTENT_TYPE_BY_EXTENSION.get(extension.lower(), GENERIC_CONTENT_TYPE)


def sanitize_file_name(name: str | None, max_length: int = 64) -> str:
    """
    Produces a filesystem-safe file name.

    Characters outside ``[A-Za-z0-9.-]`` become underscores, runs of dots are
    collapsed, leading and trailing dots are stripped, and the result is
    truncated to ``max_length`` while keeping the extension.
    """
    cleaned = _UNSAFE_CHARS.sub("_", name or "")
    cleaned = _DOT_RUNS.sub(".", cleaned).strip(".")
    if not cleaned.strip("_-"):
        return DEFAULT_FILE_NAME

    if len(cleaned) <= max_length:
        return cleaned

    stem, dot, extension = cleaned.rpartition(".")
    if not dot or len(extension) >= max_length - 1:
        return cleaned[:max_length]
    return f"{stem[: max_length - len(extension) - 1]}.{extension}"


def staged_file_name(file_name: str | None, extension: str, max_length: int = 64) -> str:
    """Builds the display name of a staged upload, ending in ``extension``."""
    base = file_name or DEFAULT_FILE_NAME
    if _name_extension(base) is None:
        base = f"{base}.{extension}"
    return sanitize_file_name(base, max_length)
