"""FastAPI dependencies for API routers."""

from collections.abc import AsyncGenerator

import httpx
from fastapi import HTTPException, Request

from jsonfeed.config import get_settings
from jsonfeed.errors import DecodeError
from jsonfeed.feed import Feed, decode

_http_client: httpx.AsyncClient | None = None


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Dependency for FastAPI routes to get the shared outbound HTTP client.

    Yields:
        Async httpx client configured from settings
    """
    global _http_client

    if _http_client is None:
        settings = get_settings()
        _http_client = httpx.AsyncClient(
            timeout=settings.fetch_timeout_seconds,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
        )

    yield _http_client


async def close_http_client() -> None:
    """Close the shared HTTP client, if one was created."""
    global _http_client

    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


async def get_feed_from_body(request: Request) -> Feed:
    """Decode the raw request body as a JSON Feed.

    Raises:
        HTTPException: 422 with the decode failure as detail
    """
    body = await request.body()
    try:
        return decode(body)
    except DecodeError as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict()) from exc
