"""JSON Feed codec, validator and fetch client."""

from jsonfeed.errors import (
    BadStatusError,
    DecodeError,
    DecodeErrorKind,
    EncodeError,
    FetchError,
    FetchTransportError,
    InvalidURLError,
    JSONFeedError,
)
from jsonfeed.feed import (
    Attachment,
    Author,
    Feed,
    Hub,
    Item,
    decode,
    encode,
    encode_to_string,
    validate,
)

__all__ = [
    "Attachment",
    "Author",
    "BadStatusError",
    "DecodeError",
    "DecodeErrorKind",
    "EncodeError",
    "Feed",
    "FetchError",
    "FetchTransportError",
    "Hub",
    "InvalidURLError",
    "Item",
    "JSONFeedError",
    "decode",
    "encode",
    "encode_to_string",
    "validate",
]
