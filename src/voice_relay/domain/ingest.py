"""Converts any accepted upload encoding into a single UploadPayload."""

import posixpath

import httpx

from voice_relay.domain.media_types import (
    DEFAULT_FILE_NAME,
    GENERIC_CONTENT_TYPE,
    media_type,
)
from voice_relay.domain.models import (
    MultipartSource,
    RawBodySource,
    RemoteUrlSource,
    UploadPayload,
    UploadSource,
)
from voice_relay.exceptions import EmptyBody, RemoteFetchFailed, UploadTooLarge
from voice_relay.infrastructure.interfaces import RemoteFetcher
from voice_relay.logging import setup_logging

logger = setup_logging(__name__)

_FETCHABLE_SCHEMES = {"http", "https"}


def url_basename(url: str) -> str | None:
    """Returns the last path segment of a URL, or None when there is none."""
    name = posixpath.basename(httpx.URL(url).path)
    return name or None


def normalize_source(
    source: UploadSource,
    fetcher: RemoteFetcher,
    max_bytes: int,
) -> UploadPayload:
    """
    Turns one upload source into an UploadPayload.

    Args:
        source: Multipart, remote URL, or raw body source.
        fetcher: Used to download remote URL sources.
        max_bytes: Largest accepted payload.

    Returns:
        UploadPayload with the audio bytes, a file name, and a content type.

    Raises:
        EmptyBody: If the audio has zero bytes.
        UploadTooLarge: If the audio exceeds ``max_bytes``.
        RemoteFetchFailed: If a remote URL cannot be downloaded.
    """
    if isinstance(source, MultipartSource):
        payload = UploadPayload(
            data=source.data,
            file_name=source.file_name or DEFAULT_FILE_NAME,
            content_type=source.content_type or GENERIC_CONTENT_TYPE,
        )
    elif isinstance(source, RemoteUrlSource):
        payload = _fetch_remote(source, fetcher, max_bytes)
    elif isinstance(source, RawBodySource):
        payload = UploadPayload(
            data=source.data,
            file_name=DEFAULT_FILE_NAME,
            content_type=source.content_type or GENERIC_CONTENT_TYPE,
        )
    else:
        raise TypeError(f"Unsupported upload source: {type(source).__name__}")

    if not payload.data:
        raise EmptyBody()
    if payload.size > max_bytes:
        raise UploadTooLarge(max_bytes)

    logger.info(
        "Upload normalized",
        extra={
            "source": source.kind,
            "file_name": payload.file_name,
            "content_type": payload.content_type,
            "size": payload.size,
        },
    )
    return payload


def _fetch_remote(
    source: RemoteUrlSource, fetcher: RemoteFetcher, max_bytes: int
) -> UploadPayload:
    """Downloads a remote URL source and merges its metadata."""
    try:
        url = httpx.URL(source.file_url)
    except (httpx.InvalidURL, ValueError) as e:
        raise RemoteFetchFailed(
            source.file_url, reason=f"malformed URL ({e})", cause=e
        ) from e

    if url.scheme not in _FETCHABLE_SCHEMES:
        raise RemoteFetchFailed(
            source.file_url, reason=f"unsupported URL scheme '{url.scheme or 'none'}'"
        )
    if not url.host:
        raise RemoteFetchFailed(source.file_url, reason="URL has no host")

    fetched = fetcher.fetch(source.file_url, max_bytes)

    file_name = (
        source.file_name
        or fetched.file_name
        or url_basename(source.file_url)
        or DEFAULT_FILE_NAME
    )
    content_type = (
        source.content_type or media_type(fetched.content_type) or GENERIC_CONTENT_TYPE
    )
    return UploadPayload(data=fetched.data, file_name=file_name, content_type=content_type)
