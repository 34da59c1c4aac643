"""JSON Feed data model, codec and validator."""

from .codec import decode, encode, encode_to_string, to_dict
from .dates import format_date, parse_date
from .identifier import IdentifierError, coerce_identifier
from .models import Attachment, Author, Feed, Hub, Item
from .validation import (
    AuthorMissingIdentifyingProperty,
    ItemMissingContent,
    MissingParameter,
    NextUrlEqualsFeedUrl,
    Violation,
    is_valid,
    validate,
)

__all__ = [
    "Attachment",
    "Author",
    "AuthorMissingIdentifyingProperty",
    "Feed",
    "Hub",
    "IdentifierError",
    "Item",
    "ItemMissingContent",
    "MissingParameter",
    "NextUrlEqualsFeedUrl",
    "Violation",
    "coerce_identifier",
    "decode",
    "encode",
    "encode_to_string",
    "format_date",
    "is_valid",
    "parse_date",
    "to_dict",
    "validate",
]
