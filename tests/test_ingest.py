"""Unit tests for upload normalization."""

import pytest

from conftest import AUDIO_BYTES, FakeFetcher
from voice_relay.domain.ingest import normalize_source, url_basename
from voice_relay.domain.models import (
    FetchedMedia,
    MultipartSource,
    RawBodySource,
    RemoteUrlSource,
)
from voice_relay.exceptions import EmptyBody, RemoteFetchFailed, UploadTooLarge

MAX_BYTES = 1024 * 1024
CLIP_URL = "https://cdn.example.com/recordings/clip%20one.wav?sig=abc"


def test_all_sources_yield_identical_bytes():
    fetcher = FakeFetcher({CLIP_URL: FetchedMedia(data=AUDIO_BYTES, content_type="audio/wav")})

    payloads = [
        normalize_source(MultipartSource(data=AUDIO_BYTES, file_name="clip.wav"), fetcher, MAX_BYTES),
        normalize_source(RawBodySource(data=AUDIO_BYTES, content_type="audio/wav"), fetcher, MAX_BYTES),
        normalize_source(RemoteUrlSource(file_url=CLIP_URL), fetcher, MAX_BYTES),
    ]

    assert {p.data for p in payloads} == {AUDIO_BYTES}


def test_multipart_keeps_declared_metadata():
    payload = normalize_source(
        MultipartSource(data=AUDIO_BYTES, file_name="memo.webm", content_type="audio/webm"),
        FakeFetcher(),
        MAX_BYTES,
    )

    assert payload.file_name == "memo.webm"
    assert payload.content_type == "audio/webm"


def test_raw_body_uses_placeholder_name_and_declared_type():
    payload = normalize_source(RawBodySource(data=AUDIO_BYTES, content_type="audio/ogg"), FakeFetcher(), MAX_BYTES)

    assert payload.file_name == "upload"
    assert payload.content_type == "audio/ogg"


def test_raw_body_without_content_type_is_generic():
    payload = normalize_source(RawBodySource(data=AUDIO_BYTES), FakeFetcher(), MAX_BYTES)

    assert payload.content_type == "application/octet-stream"


@pytest.mark.parametrize(
    "source",
    [
        RawBodySource(data=b"", content_type="audio/wav"),
        MultipartSource(data=b"", file_name="clip.wav"),
    ],
)
def test_empty_uploads_are_rejected(source):
    with pytest.raises(EmptyBody):
        normalize_source(source, FakeFetcher(), MAX_BYTES)


def test_oversized_uploads_are_rejected():
    with pytest.raises(UploadTooLarge) as exc_info:
        normalize_source(RawBodySource(data=b"x" * 11), FakeFetcher(), max_bytes=10)

    assert exc_info.value.limit_bytes == 10


def test_remote_metadata_comes_from_response_and_url():
    fetcher = FakeFetcher({CLIP_URL: FetchedMedia(data=AUDIO_BYTES, content_type="audio/wav; charset=binary")})

    payload = normalize_source(RemoteUrlSource(file_url=CLIP_URL), fetcher, MAX_BYTES)

    assert payload.file_name == "clip one.wav"
    assert payload.content_type == "audio/wav"
    assert fetcher.calls == [CLIP_URL]


def test_remote_caller_metadata_takes_precedence():
    fetcher = FakeFetcher({CLIP_URL: FetchedMedia(data=AUDIO_BYTES, content_type="application/octet-stream")})

    payload = normalize_source(
        RemoteUrlSource(file_url=CLIP_URL, file_name="visit.mp3", content_type="audio/mpeg"),
        fetcher,
        MAX_BYTES,
    )

    assert payload.file_name == "visit.mp3"
    assert payload.content_type == "audio/mpeg"


def test_remote_fetch_failure_propagates():
    fetcher = FakeFetcher({CLIP_URL: RemoteFetchFailed(CLIP_URL, status=404)})

    with pytest.raises(RemoteFetchFailed) as exc_info:
        normalize_source(RemoteUrlSource(file_url=CLIP_URL), fetcher, MAX_BYTES)

    assert exc_info.value.status == 404
    assert exc_info.value.provider_status == 404


def test_remote_empty_body_is_rejected():
    fetcher = FakeFetcher({CLIP_URL: FetchedMedia(data=b"")})

    with pytest.raises(EmptyBody):
        normalize_source(RemoteUrlSource(file_url=CLIP_URL), fetcher, MAX_BYTES)


@pytest.mark.parametrize("url", ["file:///etc/passwd", "ftp://example.com/a.wav", "clip.wav", "https://", "http://[::1"])
def test_non_http_urls_are_not_fetched(url):
    fetcher = FakeFetcher()

    with pytest.raises(RemoteFetchFailed) as exc_info:
        normalize_source(RemoteUrlSource(file_url=url), fetcher, MAX_BYTES)

    assert exc_info.value.status is None
    assert fetcher.calls == []


def test_url_basename():
    assert url_basename("https://example.com/a/b/memo.m4a?x=1") == "memo.m4a"
    assert url_basename("https://example.com/") is None


def test_malformed_url_keeps_the_parse_error():
    with pytest.raises(RemoteFetchFailed) as exc_info:
        normalize_source(RemoteUrlSource(file_url="http://[::1"), FakeFetcher(), MAX_BYTES)

    assert "malformed URL" in exc_info.value.message
    assert exc_info.value.cause is not None
