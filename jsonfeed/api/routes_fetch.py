"""Remote feed retrieval endpoint for the JSON Feed service."""

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from jsonfeed.api.dependencies import get_http_client
from jsonfeed.api.routes_validate import serialize_violations
from jsonfeed.config import get_settings
from jsonfeed.errors import (
    BadStatusError,
    DecodeError,
    FetchTransportError,
    InvalidURLError,
)
from jsonfeed.feed import to_dict, validate
from jsonfeed.fetch import fetch_feed

router = APIRouter(prefix="/api", tags=["fetch"])
limiter = Limiter(key_func=get_remote_address)


def _fetch_rate_limit() -> str:
    return get_settings().fetch_rate_limit


@router.get("/fetch")
@limiter.limit(_fetch_rate_limit)
async def fetch_remote_feed(
    request: Request,
    url: str = Query(..., description="Absolute http(s) URL of a JSON Feed"),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Fetch a remote JSON Feed, decode it and audit its structure.

    Error mapping:
        - 400: the URL is malformed
        - 422: the body is not a valid JSON Feed
        - 502: the upstream server answered with a non-2xx status
        - 504: the upstream request failed (DNS, connection, timeout)

    Returns:
        JSON response with:
            - feed: The decoded feed in canonical wire form
            - violations: Structural violations found in the feed
    """
    try:
        feed = await fetch_feed(url, client=client)
    except InvalidURLError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except DecodeError as exc:
        raise HTTPException(status_code=422, detail=exc.to_dict()) from exc
    except BadStatusError as exc:
        raise HTTPException(
            status_code=502,
            detail={"message": str(exc), "status_code": exc.status_code},
        ) from exc
    except FetchTransportError as exc:
        raise HTTPException(status_code=504, detail=str(exc)) from exc

    return {"feed": to_dict(feed), "violations": serialize_violations(validate(feed))}
