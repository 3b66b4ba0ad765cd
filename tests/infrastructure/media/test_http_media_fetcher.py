"""Tests for the HTTP media fetcher."""

import httpx
import pytest

from trust_lens.domain.errors import MediaTooLargeError
from trust_lens.infrastructure.media.http_media_fetcher import HttpMediaFetcher


def _fetcher(handler) -> HttpMediaFetcher:
    return HttpMediaFetcher(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_fetch_returns_body_and_type():
    fetcher = _fetcher(lambda request: httpx.Response(200, content=b"GIF89a", headers={"content-type": "image/gif"}))

    media = await fetcher.fetch("https://example.com/a.gif")
    await fetcher.shutdown()

    assert media.content_type == "image/gif"
    assert media.data == b"GIF89a"


@pytest.mark.asyncio
async def test_error_status_raises():
    fetcher = _fetcher(lambda request: httpx.Response(403))

    with pytest.raises(httpx.HTTPStatusError):
        await fetcher.fetch("https://example.com/private.png")
    await fetcher.shutdown()


@pytest.mark.asyncio
async def test_missing_content_type_is_empty():
    fetcher = _fetcher(lambda request: httpx.Response(200, content=b"\x00"))

    media = await fetcher.fetch("https://example.com/blob")
    await fetcher.shutdown()

    assert media.content_type == ""


@pytest.mark.asyncio
async def test_declared_length_over_limit_is_rejected():
    body = b"\x89PNG" + b"\x00" * (40 * 1024 * 1024)
    fetcher = _fetcher(lambda request: httpx.Response(200, content=body, headers={"content-type": "image/png"}))

    with pytest.raises(MediaTooLargeError):
        await fetcher.fetch("https://example.com/huge.png", max_bytes=10 * 1024 * 1024)
    await fetcher.shutdown()


@pytest.mark.asyncio
async def test_streamed_body_stops_once_over_limit():
    sent = []

    async def chunks():
        for _ in range(100):
            sent.append(1024)
            yield b"\x00" * 1024

    fetcher = _fetcher(lambda request: httpx.Response(200, content=chunks(), headers={"content-type": "video/mp4"}))

    with pytest.raises(MediaTooLargeError):
        await fetcher.fetch("https://example.com/endless.mp4", max_bytes=4096)
    await fetcher.shutdown()

    assert sum(sent) <= 5 * 1024


@pytest.mark.asyncio
async def test_body_at_limit_is_returned():
    fetcher = _fetcher(lambda request: httpx.Response(200, content=b"\x00" * 4096, headers={"content-type": "image/png"}))

    media = await fetcher.fetch("https://example.com/exact.png", max_bytes=4096)
    await fetcher.shutdown()

    assert len(media.data) == 4096
