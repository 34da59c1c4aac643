"""Pydantic models for JSON Feed documents.

Attribute names are the snake_case keys used on the wire. Models are frozen
and never hold a reference back to their container.

Fields that the validator checks (``Feed.version``, ``Feed.title``,
``Feed.items``, ``Attachment.url``, ``Attachment.mime_type``, ``Hub.type``,
``Hub.url``) may be left out when building a model in code, so that an
incomplete feed can still be inspected. The decoder passes a ``decoding``
context flag that turns the ones the format requires into hard errors.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
)
from pydantic_core import PydanticCustomError

from .dates import format_date, parse_date
from .identifier import IdentifierError, coerce_identifier

DECODING = "decoding"


def _is_decoding(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get(DECODING))


def _required_when_decoding(value: Any, info: ValidationInfo) -> Any:
    if value is None and _is_decoding(info):
        raise PydanticCustomError(
            "missing_field",
            "'{field}' is required",
            {"field": info.field_name},
        )
    return value


def _to_datetime(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        # Hold exactly what the encoder writes: UTC when naive, millisecond precision
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.replace(microsecond=value.microsecond // 1000 * 1000)
    if not isinstance(value, str):
        raise PydanticCustomError(
            "date_type",
            "Date must be a string, got {kind}",
            {"kind": type(value).__name__},
        )
    parsed = parse_date(value)
    if parsed is None:
        raise PydanticCustomError(
            "malformed_date",
            "'{value}' is not an RFC 3339 timestamp",
            {"value": value},
        )
    return parsed


class FeedModel(BaseModel):
    """Base for all feed entities: immutable, strict, tolerant of unknown keys."""

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)


class Author(FeedModel):
    """Author of a feed or an item. At least one field should be set."""

    name: str | None = None
    url: str | None = None
    avatar: str | None = None


class Hub(FeedModel):
    """Endpoint for real-time update notifications (e.g. WebSub)."""

    type: str | None = Field(default=None, validate_default=True)
    url: str | None = Field(default=None, validate_default=True)

    @field_validator("type", "url")
    @classmethod
    def check_required(cls, value: str | None, info: ValidationInfo) -> str | None:
        return _required_when_decoding(value, info)


class Attachment(FeedModel):
    """Media resource attached to an item, e.g. a podcast episode."""

    url: str | None = Field(default=None, validate_default=True)
    mime_type: str | None = None
    title: str | None = None
    size_in_bytes: float | None = None
    duration_in_seconds: float | None = None

    @field_validator("url")
    @classmethod
    def check_required(cls, value: str | None, info: ValidationInfo) -> str | None:
        return _required_when_decoding(value, info)


class Item(FeedModel):
    """A single entry of a feed."""

    id: str
    url: str | None = None
    external_url: str | None = None
    title: str | None = None
    content_html: str | None = None
    content_text: str | None = None
    summary: str | None = None
    image: str | None = None
    banner_image: str | None = None
    date_published: datetime | None = None
    date_modified: datetime | None = None
    author: Author | None = None
    tags: list[str] | None = None
    attachments: list[Attachment] | None = None

    @field_validator("id", mode="plain")
    @classmethod
    def coerce_id(cls, value: Any) -> str:
        try:
            return coerce_identifier(value)
        except IdentifierError as exc:
            raise PydanticCustomError(
                "invalid_identifier", "{reason}", {"reason": str(exc)}
            ) from exc

    @field_validator("date_published", "date_modified", mode="plain")
    @classmethod
    def parse_dates(cls, value: Any) -> datetime | None:
        return _to_datetime(value)

    @field_serializer("date_published", "date_modified", when_used="json")
    def format_dates(self, value: datetime | None) -> str | None:
        return format_date(value) if value is not None else None


class Feed(FeedModel):
    """Top-level JSON Feed document."""

    version: str | None = Field(default=None, validate_default=True)
    title: str | None = Field(default=None, validate_default=True)
    items: list[Item] | None = Field(default=None, validate_default=True)
    home_page_url: str | None = None
    feed_url: str | None = None
    description: str | None = None
    user_comment: str | None = None
    next_url: str | None = None
    icon: str | None = None
    favicon: str | None = None
    author: Author | None = None
    expired: bool | None = None
    hubs: list[Hub] | None = None

    @field_validator("version", "title", "items")
    @classmethod
    def check_required(cls, value: Any, info: ValidationInfo) -> Any:
        return _required_when_decoding(value, info)
