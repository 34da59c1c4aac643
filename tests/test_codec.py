"""Tests for JSON Feed decoding and encoding."""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from jsonfeed.errors import DecodeError, DecodeErrorKind, EncodeError
from jsonfeed.feed import (
    Attachment,
    Author,
    Feed,
    Hub,
    Item,
    decode,
    encode,
    encode_to_string,
    to_dict,
    validate,
)

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> bytes:
    """Read a JSON fixture document as raw bytes."""
    return (FIXTURES / f"{name}.json").read_bytes()


def feed_json(**fields) -> bytes:
    """Build a minimal valid feed document, overriding top-level fields."""
    doc = {"version": "https://jsonfeed.org/version/1", "title": "x", "items": []}
    doc.update(fields)
    return json.dumps(doc).encode()


def item_json(**fields) -> bytes:
    """Build a feed document holding a single item with the given fields."""
    return feed_json(items=[fields])


class TestDecodeFixtures:
    """Decoding of whole fixture documents."""

    @pytest.mark.parametrize(
        "name",
        ["bare", "bare_with_item", "alternate_item_id_types", "podcast"],
    )
    def test_valid_documents_decode(self, name):
        """Well-formed documents produce a Feed."""
        assert isinstance(decode(load_fixture(name)), Feed)

    @pytest.mark.parametrize(
        "name,kind,path",
        [
            ("no_version", DecodeErrorKind.MISSING_FIELD, "version"),
            ("no_title", DecodeErrorKind.MISSING_FIELD, "title"),
            ("no_items", DecodeErrorKind.MISSING_FIELD, "items"),
            ("no_item_id", DecodeErrorKind.MISSING_FIELD, "items.0.id"),
            (
                "incorrect_date_format",
                DecodeErrorKind.MALFORMED_DATE,
                "items.0.date_published",
            ),
        ],
    )
    def test_invalid_documents_fail(self, name, kind, path):
        """Documents missing required data fail with a located error."""
        with pytest.raises(DecodeError) as exc_info:
            decode(load_fixture(name))

        assert exc_info.value.kind is kind
        assert exc_info.value.path == path

    def test_podcast_fields(self):
        """Every field of a full document is mapped onto the model."""
        feed = decode(load_fixture("podcast"))

        assert feed.version == "https://jsonfeed.org/version/1"
        assert feed.title == "The Record"
        assert feed.home_page_url == "https://example.org/"
        assert feed.feed_url == "https://example.org/feed.json"
        assert feed.expired is False
        assert feed.next_url is None
        assert feed.author == Author(
            name="Ada Example",
            url="https://example.org/about/",
            avatar="https://example.org/images/ada.png",
        )
        assert feed.hubs == [Hub(type="WebSub", url="https://hub.example.org/")]
        assert len(feed.items) == 2

        episode = feed.items[0]
        assert episode.id == "https://example.org/2017/06/26/episode-2"
        assert episode.title == "Episode 2: Caching — and Invalidation"
        assert episode.tags == ["caching", "http"]
        assert episode.date_published == datetime(
            2017, 6, 26, 17, 0, 0, tzinfo=timezone.utc
        )
        assert episode.date_modified.utcoffset() == timedelta(hours=2)
        assert episode.date_modified.microsecond == 250000
        assert episode.attachments == [
            Attachment(
                url="https://example.org/audio/episode-2.m4a",
                mime_type="audio/x-m4a",
                title="Episode 2 audio",
                size_in_bytes=89970236,
                duration_in_seconds=6629,
            )
        ]

        interview = feed.items[1]
        assert interview.id == "1"
        assert interview.external_url == "https://elsewhere.example.com/interview"
        assert interview.date_published == datetime(
            2017, 6, 19, 8, 15, tzinfo=timezone.utc
        )
        assert interview.author == Author(name="Guest Host")
        assert interview.attachments is None

    def test_alternate_item_id_types(self):
        """String, integer and float ids are normalized to text."""
        feed = decode(load_fixture("alternate_item_id_types"))
        assert [item.id for item in feed.items] == ["abc", "42", "4.5", "7"]

    def test_decode_accepts_text(self):
        """Decoding works on str as well as bytes."""
        assert decode(load_fixture("bare").decode()) == decode(load_fixture("bare"))


class TestDecodeFailures:
    """Decode failure kinds and locations."""

    @pytest.mark.parametrize("data", [b"", b"{not json", b'{"version": ', b"\xff\xfe"])
    def test_malformed_json(self, data):
        """Bytes that are not JSON fail as invalid_json."""
        with pytest.raises(DecodeError) as exc_info:
            decode(data)
        assert exc_info.value.kind is DecodeErrorKind.INVALID_JSON

    @pytest.mark.parametrize("data", [b"[]", b'"feed"', b"42", b"null"])
    def test_top_level_must_be_object(self, data):
        """A JSON value that is not an object is the wrong shape."""
        with pytest.raises(DecodeError) as exc_info:
            decode(data)
        assert exc_info.value.kind is DecodeErrorKind.WRONG_TYPE
        assert exc_info.value.path == ""

    @pytest.mark.parametrize("field", ["version", "title", "items"])
    def test_required_field_null_is_missing(self, field):
        """An explicit null counts as a missing required field."""
        with pytest.raises(DecodeError) as exc_info:
            decode(feed_json(**{field: None}))
        assert exc_info.value.kind is DecodeErrorKind.MISSING_FIELD
        assert exc_info.value.path == field

    @pytest.mark.parametrize(
        "fields,path",
        [
            ({"title": 3}, "title"),
            ({"items": {}}, "items"),
            ({"expired": "yes"}, "expired"),
            ({"expired": 1}, "expired"),
            ({"hubs": {"type": "WebSub"}}, "hubs"),
            ({"author": "Ada"}, "author"),
            ({"items": ["not an item"]}, "items.0"),
        ],
    )
    def test_wrong_shape(self, fields, path):
        """Fields of the wrong JSON type fail without coercion."""
        with pytest.raises(DecodeError) as exc_info:
            decode(feed_json(**fields))
        assert exc_info.value.kind is DecodeErrorKind.WRONG_TYPE
        assert exc_info.value.path == path

    @pytest.mark.parametrize(
        "fields,path",
        [
            ({"id": "1", "tags": "swift"}, "items.0.tags"),
            ({"id": "1", "tags": [1]}, "items.0.tags.0"),
            ({"id": "1", "date_published": 1498557600}, "items.0.date_published"),
            (
                {"id": "1", "attachments": [{"url": "a", "size_in_bytes": "10"}]},
                "items.0.attachments.0.size_in_bytes",
            ),
        ],
    )
    def test_item_wrong_shape(self, fields, path):
        """Item-level shape errors name the item and field."""
        with pytest.raises(DecodeError) as exc_info:
            decode(item_json(**fields))
        assert exc_info.value.kind is DecodeErrorKind.WRONG_TYPE
        assert exc_info.value.path == path

    @pytest.mark.parametrize("value", [None, True, [], ["1"], {}, {"id": "1"}])
    def test_non_scalar_item_id(self, value):
        """Only strings and numbers are acceptable item ids."""
        with pytest.raises(DecodeError) as exc_info:
            decode(item_json(id=value, content_text="x"))
        assert exc_info.value.kind is DecodeErrorKind.INVALID_IDENTIFIER
        assert exc_info.value.path == "items.0.id"

    def test_missing_attachment_url(self):
        """Attachment url is required on the wire."""
        data = item_json(id="1", attachments=[{"mime_type": "audio/mpeg"}])
        with pytest.raises(DecodeError) as exc_info:
            decode(data)
        assert exc_info.value.kind is DecodeErrorKind.MISSING_FIELD
        assert exc_info.value.path == "items.0.attachments.0.url"

    @pytest.mark.parametrize("hub,field", [({"url": "u"}, "type"), ({"type": "t"}, "url")])
    def test_missing_hub_fields(self, hub, field):
        """Hub type and url are required on the wire."""
        with pytest.raises(DecodeError) as exc_info:
            decode(feed_json(hubs=[hub]))
        assert exc_info.value.kind is DecodeErrorKind.MISSING_FIELD
        assert exc_info.value.path == f"hubs.0.{field}"

    def test_malformed_date_is_distinct_from_missing(self):
        """A rejected date string is a malformed_date failure."""
        with pytest.raises(DecodeError) as exc_info:
            decode(item_json(id="1", date_modified="2020-01-02X03:04:05Z"))
        assert exc_info.value.kind is DecodeErrorKind.MALFORMED_DATE
        assert exc_info.value.path == "items.0.date_modified"

    def test_error_details(self):
        """Decode errors carry a message and the underlying error list."""
        with pytest.raises(DecodeError) as exc_info:
            decode(load_fixture("no_title"))
        error = exc_info.value
        assert "title" in error.message
        assert error.errors
        assert error.to_dict() == {
            "kind": "missing_field",
            "path": "title",
            "message": error.message,
        }

    def test_failure_is_logged_with_location(self, caplog):
        """The debug log for a failed decode carries the kind and path."""
        with caplog.at_level("DEBUG", logger="jsonfeed.feed.codec"):
            with pytest.raises(DecodeError):
                decode(load_fixture("no_item_id"))

        record = caplog.records[-1]
        assert record.error_kind == "missing_field"
        assert record.error_path == "items.0.id"


class TestDecodeLeniency:
    """Things decoding tolerates."""

    def test_unknown_keys_ignored(self):
        """Extension keys at any level do not break decoding."""
        data = feed_json(
            _custom={"a": 1},
            items=[{"id": "1", "content_text": "x", "_ext": True}],
            author={"name": "Ada", "email": "ada@example.org"},
        )
        feed = decode(data)
        assert feed.items[0].id == "1"
        assert feed.author == Author(name="Ada")

    def test_optional_fields_may_be_null(self):
        """Null optional fields decode as None."""
        feed = decode(
            item_json(id="1", content_text=None, date_published=None, tags=None)
        )
        assert feed.items[0].content_text is None
        assert feed.items[0].date_published is None

    def test_items_may_be_empty(self):
        """An empty item list is structurally fine."""
        assert decode(feed_json(items=[])).items == []

    def test_item_without_content_still_decodes(self):
        """Content presence is a validation rule, not a decode rule."""
        feed = decode(item_json(id="1"))
        assert feed.items[0].content_html is None
        assert feed.items[0].content_text is None

    def test_integer_sizes_are_numbers(self):
        """Attachment sizes accept JSON integers and floats."""
        feed = decode(
            item_json(
                id="1",
                attachments=[
                    {"url": "a", "size_in_bytes": 10, "duration_in_seconds": 1.5}
                ],
            )
        )
        attachment = feed.items[0].attachments[0]
        assert attachment.size_in_bytes == 10
        assert attachment.duration_in_seconds == 1.5


class TestEncode:
    """Encoding feeds to canonical bytes."""

    def test_end_to_end_integer_id(self):
        """An integer id decodes to text and encodes as a JSON string."""
        data = (
            b'{"version": "https://jsonfeed.org/version/1", "title": "x",'
            b' "items": [{"id": 1, "content_html": "<p>hi</p>"}]}'
        )
        feed = decode(data)
        assert feed.author is None

        encoded = encode(feed)
        assert b'"id":"1"' in encoded
        assert json.loads(encoded)["items"][0]["id"] == "1"
        assert validate(feed) == []

    def test_slashes_are_not_escaped(self):
        """URLs are emitted with literal forward slashes."""
        feed = decode(load_fixture("podcast"))
        encoded = encode(feed)
        assert b"\\/" not in encoded
        assert b'"feed_url":"https://example.org/feed.json"' in encoded

    def test_non_ascii_is_utf8(self):
        """Non-ASCII text is written as UTF-8, not escaped."""
        encoded = encode(decode(load_fixture("podcast")))
        assert "Caching — and Invalidation".encode() in encoded

    def test_absent_fields_are_omitted(self):
        """None fields are left out of the output."""
        doc = json.loads(encode(decode(load_fixture("bare_with_item"))))
        assert doc == {
            "version": "https://jsonfeed.org/version/1",
            "title": "Bare Feed",
            "items": [{"id": "1", "content_text": "Hello, world!"}],
        }

    def test_dates_use_fixed_offset_form(self):
        """Dates are re-emitted in canonical RFC 3339 form."""
        doc = to_dict(decode(load_fixture("podcast")))
        assert doc["items"][0]["date_published"] == "2017-06-26T10:00:00-07:00"
        assert doc["items"][0]["date_modified"] == "2017-06-27T09:30:15.250+02:00"
        assert doc["items"][1]["date_published"] == "2017-06-19T08:15:00Z"

    def test_encode_in_memory_feed(self):
        """A feed built in code encodes and decodes back unchanged."""
        html = '<p>Hello World</p>\n<a href="http://www.google.com/">Link</a>'
        item = Item(
            id="Hello World",
            title="Hello World",
            content_html=html,
            date_published=datetime(2017, 6, 27, 12, 0, 0, tzinfo=timezone.utc),
            tags=["iOS", "Swift"],
        )
        feed = Feed(
            version="https://jsonfeed.org/version/1",
            title="xcode.coffee",
            items=[item],
            home_page_url="http://xcode.coffee",
            feed_url="http://xcode.coffee/feed.json",
            description="A blog about iOS development.",
        )

        text = encode_to_string(feed)
        assert '"date_published":"2017-06-27T12:00:00Z"' in text
        assert '<a href=\\"http://www.google.com/\\">' in text
        assert decode(encode(feed)) == feed

    def test_pretty_printing(self):
        """encode_to_string can indent its output."""
        feed = decode(load_fixture("bare"))
        text = encode_to_string(feed, indent=2)
        assert text.startswith("{\n  ")
        assert json.loads(text) == json.loads(encode(feed))

    def test_unserializable_value_is_reported(self):
        """Values JSON cannot represent raise EncodeError."""
        feed = Feed.model_construct(
            version="v", title="t", items=[], expired=object()
        )
        with pytest.raises(EncodeError):
            encode(feed)

    def test_naive_dates_encode_as_utc(self):
        """Naive datetimes built in code are written as UTC."""
        feed = Feed(
            version="v",
            title="t",
            items=[Item(id="1", content_text="x", date_published=datetime(2020, 1, 2))],
        )
        doc = to_dict(feed)
        assert doc["items"][0]["date_published"] == "2020-01-02T00:00:00Z"

    @pytest.mark.parametrize(
        "value",
        [
            datetime(2020, 1, 2, 3, 4, 5, 123456, tzinfo=timezone.utc),
            datetime(2020, 1, 2, 3, 4, 5, 123456),
            datetime(2020, 1, 2, 3, 4, 5, 999, tzinfo=timezone(timedelta(hours=9))),
        ],
    )
    def test_in_memory_dates_survive_round_trip(self, value):
        """Dates set in code hold what the encoder writes."""
        feed = Feed(
            version="v",
            title="t",
            items=[Item(id="1", content_text="x", date_published=value)],
        )
        assert validate(feed) == []

        decoded = decode(encode(feed))

        assert decoded == feed
        published = decoded.items[0].date_published
        assert published.microsecond == value.microsecond // 1000 * 1000


class TestModelConstruction:
    """Building models directly in code."""

    def test_models_are_frozen(self):
        """Entities cannot be mutated after construction."""
        author = Author(name="Ada")
        with pytest.raises(ValidationError):
            author.name = "Grace"

    def test_incomplete_feed_can_be_built(self):
        """Outside decoding, checked fields may be left out."""
        feed = Feed()
        assert feed.version is None
        assert feed.items is None

    def test_item_id_is_coerced_in_code(self):
        """Numeric ids passed in code are normalized too."""
        assert Item(id=3).id == "3"

    def test_date_strings_are_parsed_in_code(self):
        """Date strings passed in code go through the tolerant parser."""
        item = Item(id="1", date_published="2020-01-02 03:04:05-0500")
        assert item.date_published.utcoffset() == timedelta(hours=-5)

    def test_datetimes_are_normalized_in_code(self):
        """Naive datetimes gain UTC and precision is cut to milliseconds."""
        item = Item(id="1", date_published=datetime(2020, 1, 2, 3, 4, 5, 678901))
        assert item.date_published == datetime(
            2020, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc
        )
