"""Structural validation of decoded feeds.

A feed can decode successfully and still break rules of the format, e.g. an
item with no content or an author with no identifying field. ``validate``
collects every such violation instead of stopping at the first one.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from .models import Attachment, Author, Feed, Hub, Item


class _Violation(BaseModel):
    model_config = ConfigDict(frozen=True)


class MissingParameter(_Violation):
    """A required field is absent."""

    kind: Literal["missing_parameter"] = "missing_parameter"
    field_name: str

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        return f"Missing required parameter '{self.field_name}'"


class AuthorMissingIdentifyingProperty(_Violation):
    """An author has none of name, url and avatar."""

    kind: Literal["author_missing_identifying_property"] = (
        "author_missing_identifying_property"
    )
    author: Author

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        return "Author must have at least one of 'name', 'url' or 'avatar'"


class ItemMissingContent(_Violation):
    """An item has neither content_html nor content_text."""

    kind: Literal["item_missing_content"] = "item_missing_content"
    item: Item

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        return (
            f"Item '{self.item.id}' must have 'content_html' or 'content_text'"
        )


class NextUrlEqualsFeedUrl(_Violation):
    """next_url points back at the feed itself."""

    kind: Literal["next_url_equals_feed_url"] = "next_url_equals_feed_url"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def message(self) -> str:
        return "'next_url' must not be the same as 'feed_url'"


Violation = Annotated[
    Union[
        MissingParameter,
        AuthorMissingIdentifyingProperty,
        ItemMissingContent,
        NextUrlEqualsFeedUrl,
    ],
    Field(discriminator="kind"),
]


def _validate_author(author: Author) -> list[Violation]:
    if author.name is None and author.url is None and author.avatar is None:
        return [AuthorMissingIdentifyingProperty(author=author)]
    return []


def _validate_attachment(attachment: Attachment) -> list[Violation]:
    violations: list[Violation] = []
    if attachment.url is None:
        violations.append(MissingParameter(field_name="url"))
    if attachment.mime_type is None:
        violations.append(MissingParameter(field_name="mime_type"))
    return violations


def _validate_item(item: Item) -> list[Violation]:
    violations: list[Violation] = []
    if item.content_html is None and item.content_text is None:
        violations.append(ItemMissingContent(item=item))
    if item.author is not None:
        violations.extend(_validate_author(item.author))
    for attachment in item.attachments or []:
        violations.extend(_validate_attachment(attachment))
    return violations


def _validate_hub(hub: Hub) -> list[Violation]:
    violations: list[Violation] = []
    if hub.type is None:
        violations.append(MissingParameter(field_name="type"))
    if hub.url is None:
        violations.append(MissingParameter(field_name="url"))
    return violations


def validate(feed: Feed) -> list[Violation]:
    """
    Check a feed against the structural rules of the format.

    Violations are returned in a fixed order: feed version and title, feed
    author, items in document order (content, author, attachments for each),
    hubs in document order, and finally the next_url/feed_url check.

    Args:
        feed: Feed to inspect. It is never modified.

    Returns:
        Every violation found; an empty list means the feed conforms
    """
    violations: list[Violation] = []

    if feed.version is None:
        violations.append(MissingParameter(field_name="version"))
    if feed.title is None:
        violations.append(MissingParameter(field_name="title"))

    if feed.author is not None:
        violations.extend(_validate_author(feed.author))

    if feed.items is None:
        violations.append(MissingParameter(field_name="items"))
    else:
        for item in feed.items:
            violations.extend(_validate_item(item))

    for hub in feed.hubs or []:
        violations.extend(_validate_hub(hub))

    # Literal comparison: no URL normalization
    if (
        feed.next_url is not None
        and feed.feed_url is not None
        and feed.next_url == feed.feed_url
    ):
        violations.append(NextUrlEqualsFeedUrl())

    return violations


def is_valid(feed: Feed) -> bool:
    """Return True if the feed has no structural violations."""
    return not validate(feed)
