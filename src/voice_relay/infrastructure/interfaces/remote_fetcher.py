"""Abstract interface for downloading audio referenced by URL."""

from abc import ABC, abstractmethod

from voice_relay.domain.models import FetchedMedia


class RemoteFetcher(ABC):
    """Abstract base class for remote audio download backends."""

    @abstractmethod
    def fetch(self, url: str, max_bytes: int) -> FetchedMedia:
        """
        Downloads the resource at ``url`` with a single GET.

        Args:
            url: An http or https URL.
            max_bytes: Largest body accepted before aborting.

        Returns:
            FetchedMedia with the body and response metadata.

        Raises:
            RemoteFetchFailed: On a non-success status or transport error.
            UploadTooLarge: If the body exceeds ``max_bytes``.
        """
        pass
