"""Reads an inbound request into one of the UploadSource variants."""

from fastapi import Request
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

from voice_relay.domain.media_types import media_type
from voice_relay.domain.models import (
    MultipartSource,
    RawBodySource,
    RemoteUrlSource,
    UploadSource,
)
from voice_relay.exceptions import (
    IngestError,
    MalformedJsonBody,
    MissingFileField,
    MissingFileUrl,
    UploadTooLarge,
)

FILE_FIELD = "file"

# Allowance for boundaries and part headers around the file part.
MULTIPART_ENVELOPE_BYTES = 64 * 1024


class RemoteUrlRequest(BaseModel):
    """JSON envelope pointing at audio hosted elsewhere."""

    file_url: str | None = None
    file_name: str | None = None
    content_type: str | None = None


def _is_json(mtype: str) -> bool:
    return mtype == "application/json" or mtype.endswith("+json")


def _declared_length(request: Request) -> int | None:
    try:
        return int(request.headers["content-length"])
    except (KeyError, ValueError):
        return None


async def _read_capped(request: Request, max_bytes: int) -> bytes:
    """Reads the body chunk by chunk, stopping as soon as it passes ``max_bytes``."""
    declared = _declared_length(request)
    if declared is not None and declared > max_bytes:
        raise UploadTooLarge(max_bytes)

    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            raise UploadTooLarge(max_bytes)
        chunks.append(chunk)
    return b"".join(chunks)


def _envelope_error(error: ValidationError) -> IngestError:
    details = error.errors()
    if any(detail["type"] == "json_invalid" for detail in details):
        return MalformedJsonBody(error)
    # Errors without a location mean the document is not an object.
    if any(not detail["loc"] for detail in details):
        return MissingFileUrl()
    return MalformedJsonBody(error)


async def read_upload_source(request: Request, max_bytes: int) -> UploadSource:
    """
    Branches on the request Content-Type.

    ``multipart/form-data`` requires a file part named ``file``; JSON bodies
    must carry ``file_url``; any other content type is taken as raw audio.
    Bodies over ``max_bytes`` are refused without being read to the end.

    Raises:
        UploadTooLarge: If the body or the uploaded file exceeds ``max_bytes``.
        MissingFileField: If a multipart request has no ``file`` part.
        MalformedJsonBody: If a JSON request cannot be decoded.
        MissingFileUrl: If a JSON request has no ``file_url``.
    """
    declared = request.headers.get("content-type")
    mtype = media_type(declared)

    if mtype == "multipart/form-data":
        length = _declared_length(request)
        if length is not None and length > max_bytes + MULTIPART_ENVELOPE_BYTES:
            raise UploadTooLarge(max_bytes)

        form = await request.form()
        upload = form.get(FILE_FIELD)
        if not isinstance(upload, UploadFile):
            raise MissingFileField(FILE_FIELD)
        try:
            if upload.size is not None and upload.size > max_bytes:
                raise UploadTooLarge(max_bytes)
            data = await upload.read()
        finally:
            await upload.close()
        return MultipartSource(
            data=data,
            file_name=upload.filename or None,
            content_type=upload.content_type or None,
        )

    if _is_json(mtype):
        body = await _read_capped(request, max_bytes)
        if not body.strip():
            raise MissingFileUrl()
        try:
            envelope = RemoteUrlRequest.model_validate_json(body)
        except ValidationError as e:
            raise _envelope_error(e) from e
        if not envelope.file_url or not envelope.file_url.strip():
            raise MissingFileUrl()
        return RemoteUrlSource(
            file_url=envelope.file_url.strip(),
            file_name=envelope.file_name or None,
            content_type=envelope.content_type or None,
        )

    data = await _read_capped(request, max_bytes)
    return RawBodySource(data=data, content_type=declared or None)
