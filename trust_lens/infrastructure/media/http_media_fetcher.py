"""httpx implementation of the media fetcher."""

import logging
from typing import Optional

import httpx

from ...domain.errors import MediaTooLargeError
from ...domain.models.media import FetchedMedia

logger = logging.getLogger(__name__)


class HttpMediaFetcher:
    """Downloads remote images and videos over HTTP(S)."""

    def __init__(self, timeout: float = 20.0, client: Optional[httpx.AsyncClient] = None):
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            client: Preconfigured client, mainly for tests
        """
        self._timeout = timeout
        self._client = client

    async def fetch(self, url: str, max_bytes: Optional[int] = None) -> FetchedMedia:
        """Download url and return its body and content type.

        The body is streamed so that a resource bigger than max_bytes is
        abandoned as soon as the limit is crossed.

        Raises:
            MediaTooLargeError: If the body is bigger than max_bytes
            httpx.HTTPError: On transport failures and non-2xx responses
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout, follow_redirects=True)

        async with self._client.stream("GET", url) as response:
            response.raise_for_status()
            content_type = response.headers.get("content-type", "")

            declared = response.headers.get("content-length", "")
            if max_bytes is not None and declared.isdigit() and int(declared) > max_bytes:
                raise MediaTooLargeError(f"{url} declares {declared} bytes, limit is {max_bytes}")

            body = bytearray()
            async for chunk in response.aiter_bytes():
                body.extend(chunk)
                if max_bytes is not None and len(body) > max_bytes:
                    raise MediaTooLargeError(f"{url} is bigger than {max_bytes} bytes")

        logger.debug(f"📦 {url}: {content_type}, {len(body)} bytes")
        return FetchedMedia(content_type=content_type, data=bytes(body))

    async def shutdown(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
