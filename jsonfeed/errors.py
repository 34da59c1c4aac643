"""Exception hierarchy for decoding, encoding and fetching JSON Feeds."""

from enum import Enum
from typing import Any


class JSONFeedError(Exception):
    """Base class for every error raised by this package."""


class DecodeErrorKind(str, Enum):
    """Why a document could not be turned into a Feed."""

    INVALID_JSON = "invalid_json"
    MISSING_FIELD = "missing_field"
    WRONG_TYPE = "wrong_type"
    MALFORMED_DATE = "malformed_date"
    INVALID_IDENTIFIER = "invalid_identifier"


class DecodeError(JSONFeedError):
    """A document could not be decoded.

    Attributes:
        kind: Category of the failure
        path: Dotted location of the offending field (e.g. ``items.0.id``),
            empty for failures that concern the whole document
        message: Human-readable description
        errors: Underlying pydantic error list, when there is one
    """

    def __init__(
        self,
        kind: DecodeErrorKind,
        path: str,
        message: str,
        errors: list[dict[str, Any]] | None = None,
    ):
        self.kind = kind
        self.path = path
        self.message = message
        self.errors = errors or []
        where = f" at '{path}'" if path else ""
        super().__init__(f"{kind.value}{where}: {message}")

    def to_dict(self) -> dict[str, str]:
        """Return a JSON-friendly summary of the failure."""
        return {"kind": self.kind.value, "path": self.path, "message": self.message}


class EncodeError(JSONFeedError):
    """A Feed could not be serialized to JSON."""


class FetchError(JSONFeedError):
    """Retrieving a feed over the network failed."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(message)


class InvalidURLError(FetchError):
    """The URL was rejected before any request was made."""

    def __init__(self, url: str):
        super().__init__(url, f"Invalid feed URL: {url!r}")


class FetchTransportError(FetchError):
    """The request failed at the transport level (DNS, connect, timeout...)."""

    def __init__(self, url: str, reason: str):
        super().__init__(url, f"Request to {url} failed: {reason}")


class BadStatusError(FetchError):
    """The server answered with a non-2xx status code."""

    def __init__(self, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(url, f"{url} returned HTTP {status_code}")
