"""Validation and normalization endpoints for posted JSON Feed documents."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response

from jsonfeed.api.dependencies import get_feed_from_body
from jsonfeed.errors import EncodeError
from jsonfeed.feed import Feed, Violation, encode, validate

FEED_MEDIA_TYPE = "application/feed+json"

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["validate"])


def serialize_violations(violations: list[Violation]) -> list[dict[str, Any]]:
    """Render violations as JSON-friendly dicts, including their message."""
    return [v.model_dump(mode="json", exclude_none=True) for v in violations]


@router.post("/validate")
async def validate_feed(feed: Feed = Depends(get_feed_from_body)):
    """
    Validate a JSON Feed document sent as the raw request body.

    Returns:
        JSON response with:
            - valid: True if the feed has no structural violations
            - violations: Every violation found, in evaluation order

    A body that cannot be decoded yields 422 with the decode failure.
    """
    violations = validate(feed)
    return {"valid": not violations, "violations": serialize_violations(violations)}


@router.post("/normalize")
async def normalize_feed(feed: Feed = Depends(get_feed_from_body)) -> Response:
    """Re-encode a posted JSON Feed document in canonical form."""
    try:
        content = encode(feed)
    except EncodeError as exc:
        logger.error("Failed to encode decoded feed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return Response(content=content, media_type=FEED_MEDIA_TYPE)
