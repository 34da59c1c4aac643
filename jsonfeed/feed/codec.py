"""Decoding and encoding of JSON Feed documents."""

import json
import logging
from typing import Any

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from jsonfeed.errors import DecodeError, DecodeErrorKind, EncodeError

from .models import DECODING, Feed

logger = logging.getLogger(__name__)

# pydantic error types that deserve their own decode failure kind;
# anything else is a shape mismatch
_KIND_BY_ERROR_TYPE = {
    "json_invalid": DecodeErrorKind.INVALID_JSON,
    "missing": DecodeErrorKind.MISSING_FIELD,
    "missing_field": DecodeErrorKind.MISSING_FIELD,
    "malformed_date": DecodeErrorKind.MALFORMED_DATE,
    "invalid_identifier": DecodeErrorKind.INVALID_IDENTIFIER,
}


def _to_decode_error(exc: ValidationError) -> DecodeError:
    errors = exc.errors(include_url=False)
    first = errors[0]
    kind = _KIND_BY_ERROR_TYPE.get(first["type"], DecodeErrorKind.WRONG_TYPE)
    path = ".".join(str(part) for part in first["loc"])
    return DecodeError(kind, path, first["msg"], errors=errors)


def decode(data: bytes | bytearray | str) -> Feed:
    """
    Decode a JSON Feed document.

    Unknown keys are ignored. Fields the format requires must be present,
    dates must follow the accepted RFC 3339 variants and item ids may be
    strings or numbers.

    Args:
        data: Raw document, as received from the network or read from disk

    Returns:
        The decoded Feed

    Raises:
        DecodeError: If the document is not valid JSON or does not have the
            shape of a feed. No partial Feed is ever returned.
    """
    try:
        return Feed.model_validate_json(data, context={DECODING: True})
    except ValidationError as exc:
        error = _to_decode_error(exc)
        logger.debug(
            "Failed to decode feed: %s",
            error,
            extra={"error_kind": error.kind.value, "error_path": error.path},
        )
        raise error from exc


def to_dict(feed: Feed) -> dict[str, Any]:
    """Return the JSON-compatible wire representation of a feed."""
    try:
        return feed.model_dump(mode="json", exclude_none=True)
    except PydanticSerializationError as exc:
        raise EncodeError(f"Feed could not be serialized: {exc}") from exc


def encode_to_string(feed: Feed, *, indent: int | None = None) -> str:
    """
    Serialize a feed to JSON text.

    Absent optional fields are left out and dates are written in fixed-offset
    RFC 3339 form. Output is compact unless ``indent`` is given. Neither
    ``/`` nor non-ASCII characters are escaped.

    Args:
        feed: Feed to serialize
        indent: Pretty-print with this indentation when given

    Raises:
        EncodeError: If the feed holds values JSON cannot represent
    """
    separators = (",", ":") if indent is None else None
    try:
        return json.dumps(
            to_dict(feed),
            ensure_ascii=False,
            allow_nan=False,
            indent=indent,
            separators=separators,
        )
    except (TypeError, ValueError) as exc:
        raise EncodeError(f"Feed is not JSON serializable: {exc}") from exc


def encode(feed: Feed) -> bytes:
    """Serialize a feed to canonical UTF-8 JSON bytes.

    Raises:
        EncodeError: If the feed holds values JSON or UTF-8 cannot represent
    """
    text = encode_to_string(feed)
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodeError(f"Feed contains text that is not valid Unicode: {exc}") from exc
