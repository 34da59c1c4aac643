"""HTTP retrieval of JSON Feed documents."""

import logging

import httpx

from jsonfeed.config import get_settings
from jsonfeed.errors import BadStatusError, FetchTransportError, InvalidURLError
from jsonfeed.feed import Feed, decode

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")


def _check_url(url: str) -> None:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError):
        raise InvalidURLError(url) from None
    if parsed.scheme not in ALLOWED_SCHEMES or not parsed.host:
        raise InvalidURLError(url)


async def _get(client: httpx.AsyncClient, url: str) -> httpx.Response:
    try:
        return await client.get(url)
    except httpx.TransportError as exc:
        logger.warning(
            "Transport error fetching %s: %r", url, exc, extra={"feed_url": url}
        )
        raise FetchTransportError(url, str(exc) or type(exc).__name__) from exc


async def fetch_feed(url: str, *, client: httpx.AsyncClient | None = None) -> Feed:
    """Download and decode a JSON Feed.

    A single GET request is made; nothing is retried. Redirects are followed
    when this function creates its own client.

    Args:
        url: Absolute http(s) URL of the feed
        client: Optional client to reuse. When omitted, a client is created
            for this call with the configured timeout and user agent.

    Returns:
        The decoded Feed

    Raises:
        InvalidURLError: If the URL is malformed (raised before any request)
        FetchTransportError: If the request fails at the transport level
        BadStatusError: If the response status is not 2xx
        DecodeError: If the response body is not a valid JSON Feed
    """
    _check_url(url)
    logger.info("Fetching feed %s", url, extra={"feed_url": url})

    if client is None:
        settings = get_settings()
        async with httpx.AsyncClient(
            timeout=settings.fetch_timeout_seconds,
            headers={"User-Agent": settings.user_agent},
            follow_redirects=True,
        ) as owned_client:
            response = await _get(owned_client, url)
    else:
        response = await _get(client, url)

    if not 200 <= response.status_code < 300:
        logger.warning(
            "Feed %s returned HTTP %s",
            url,
            response.status_code,
            extra={"feed_url": url, "status_code": response.status_code},
        )
        raise BadStatusError(url, response.status_code)

    return decode(response.content)
