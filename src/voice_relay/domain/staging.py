"""Request-scoped temporary files used to hand audio to the provider SDK."""

import tempfile
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from voice_relay.domain.media_types import (
    infer_content_type,
    infer_extension,
    staged_file_name,
)
from voice_relay.domain.models import StagedResource, UploadPayload
from voice_relay.exceptions import StagingError
from voice_relay.logging import setup_logging

logger = setup_logging(__name__)


def _unique_name(display_name: str) -> str:
    """Prefixes a name with a millisecond timestamp and a random token."""
    return f"{time.time_ns() // 1_000_000}-{uuid.uuid4().hex[:12]}-{display_name}"


def _remove(path: Path) -> None:
    """Deletes a staged file; failures are logged, never raised."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(
            "Failed to delete staged audio",
            extra={"path": str(path), "error": str(e)},
        )


@contextmanager
def staged_upload(
    payload: UploadPayload,
    directory: Path | None = None,
    max_name_length: int = 64,
) -> Iterator[StagedResource]:
    """
    Writes the payload to a uniquely named temporary file for one request.

    The file is removed when the block exits, whether it completes, raises,
    or is abandoned.

    Args:
        payload: Normalized upload to stage.
        directory: Where to create the file. Defaults to the system temp dir.
        max_name_length: Upper bound for the sanitized display name.

    Yields:
        StagedResource describing the written file.

    Raises:
        StagingError: If the file cannot be written.
    """
    extension = infer_extension(payload.file_name, payload.content_type)
    display_name = staged_file_name(payload.file_name, extension, max_name_length)
    content_type = infer_content_type(extension, payload.content_type)

    base_dir = Path(directory) if directory is not None else Path(tempfile.gettempdir())
    path = base_dir / _unique_name(display_name)

    try:
        with open(path, "xb") as f:
            f.write(payload.data)
    except OSError as e:
        logger.exception("Failed to stage audio", extra={"path": str(path)})
        # A collision means the file belongs to someone else.
        if not isinstance(e, FileExistsError):
            _remove(path)
        raise StagingError(str(path), e) from e

    logger.info(
        "Audio staged",
        extra={"path": str(path), "size": payload.size, "content_type": content_type},
    )
    try:
        yield StagedResource(
            path=path,
            file_name=display_name,
            content_type=content_type,
            extension=extension,
        )
    finally:
        _remove(path)
