"""Protocol for fetching remote media."""

from typing import Optional, Protocol

from ..models.media import FetchedMedia


class MediaFetcher(Protocol):
    """Downloads a remote resource so it can be analysed."""

    async def fetch(self, url: str, max_bytes: Optional[int] = None) -> FetchedMedia:
        """Download url, reading at most max_bytes of body when given.

        Raises:
            MediaTooLargeError: If the body is bigger than max_bytes
            Exception: Any transport or HTTP status failure
        """
        ...
