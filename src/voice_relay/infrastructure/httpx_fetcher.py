"""httpx implementation of the RemoteFetcher interface."""

import posixpath

import httpx

from voice_relay.domain.models import FetchedMedia
from voice_relay.exceptions import RemoteFetchFailed, UploadTooLarge
from voice_relay.infrastructure.interfaces import RemoteFetcher
from voice_relay.logging import setup_logging

logger = setup_logging(__name__)


class HttpxRemoteFetcher(RemoteFetcher):
    """Downloads audio over HTTP(S) with a shared httpx client."""

    def __init__(self, client: httpx.Client):
        self._client = client

    def fetch(self, url: str, max_bytes: int) -> FetchedMedia:
        try:
            with self._client.stream("GET", url, follow_redirects=True) as response:
                if not response.is_success:
                    logger.warning(
                        "Remote audio fetch rejected",
                        extra={"url": url, "status": response.status_code},
                    )
                    raise RemoteFetchFailed(url, status=response.status_code)

                chunks: list[bytes] = []
                received = 0
                for chunk in response.iter_bytes():
                    received += len(chunk)
                    if received > max_bytes:
                        raise UploadTooLarge(max_bytes)
                    chunks.append(chunk)

                final_path = response.url.path
                content_type = response.headers.get("content-type")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.exception("Remote audio fetch failed", extra={"url": url})
            raise RemoteFetchFailed(url, reason=str(e) or type(e).__name__, cause=e) from e

        logger.info(
            "Remote audio fetched",
            extra={"url": url, "size": received, "content_type": content_type},
        )
        return FetchedMedia(
            data=b"".join(chunks),
            content_type=content_type,
            file_name=posixpath.basename(final_path) or None,
        )
