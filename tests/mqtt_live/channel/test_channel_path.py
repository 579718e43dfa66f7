"""Tests for live channel paths and subscription checks."""

from __future__ import annotations

import pytest

from mqtt_live.channel import (
    ChannelKey,
    ChannelPath,
    authorize_subscription,
    canonicalize,
    channel_path,
    channel_prefix,
    is_valid_channel_path,
    join_path,
    parse_channel_path,
    parse_topic_key,
    topic_key,
)
from mqtt_live.channel.duration import NANOSECONDS_PER_SECOND
from mqtt_live.types import ChannelPathError, OrgMismatchError

UID = "mqtt-uid"
STREAMING_KEY = "mqtt-uid/123456789abcdef0/1"
ENCODED_TOPIC = canonicalize("sensors/temp")


class TestJoinPath:
    """Tests for slash-path joining and cleaning."""

    @pytest.mark.parametrize(
        "elements, expected",
        [
            (("a", "b", "c"), "a/b/c"),
            (("a", "", "c"), "a/c"),
            (("a/", "/b"), "a/b"),
            (("a//b", "c/"), "a/b/c"),
            (("a", ".", "b"), "a/b"),
            (("a", "b", "..", "c"), "a/c"),
            (("/a", "b"), "/a/b"),
            (("//a",), "/a"),
            (("", ""), ""),
            ((), ""),
        ],
    )
    def test_join(self, elements: tuple[str, ...], expected: str) -> None:
        """Joined paths are cleaned like URL paths."""
        assert join_path(*elements) == expected


class TestTopicKey:
    """Tests for building the per-query part of a channel path."""

    def test_layout(self) -> None:
        """Interval, topic and streaming key are joined in order."""
        key = topic_key(NANOSECONDS_PER_SECOND, ENCODED_TOPIC, STREAMING_KEY)
        assert key == f"1s/{ENCODED_TOPIC}/mqtt-uid/123456789abcdef0/1"

    def test_sub_second_interval(self) -> None:
        """Intervals use Go duration notation."""
        key = topic_key(500_000_000, ENCODED_TOPIC, STREAMING_KEY)
        assert key.startswith("500ms/")

    def test_empty_streaming_key_dropped(self) -> None:
        """A missing key leaves no trailing slash."""
        assert topic_key(NANOSECONDS_PER_SECOND, "t", "") == "1s/t"


class TestChannelPath:
    """Tests for full channel path construction."""

    def test_prefix(self) -> None:
        """Data source channels live under `ds/<uid>`."""
        assert channel_prefix(UID) == "ds/mqtt-uid"

    def test_build(self) -> None:
        """The prefix is joined to the topic key."""
        key = topic_key(NANOSECONDS_PER_SECOND, ENCODED_TOPIC, STREAMING_KEY)
        assert channel_path(UID, key) == f"ds/mqtt-uid/{key}"

    def test_rejects_raw_wildcards(self) -> None:
        """An unencoded topic with '+' cannot become a channel."""
        key = topic_key(NANOSECONDS_PER_SECOND, "sensors/+", STREAMING_KEY)
        with pytest.raises(ChannelPathError, match="disallowed characters"):
            channel_path(UID, key)

    @pytest.mark.parametrize(
        "path, valid",
        [
            ("ds/uid/1s/dGVzdA/uid/0102030405060708/1", True),
            ("a-b_c=d.e/f", True),
            ("", True),
            ("sensors/+/temp", False),
            ("sensors/#", False),
            ("a b", False),
            ("a:b", False),
            ("$SYS", False),
        ],
    )
    def test_allowed_characters(self, path: str, valid: bool) -> None:
        """Only the host's channel alphabet is accepted."""
        assert is_valid_channel_path(path) is valid


class TestParseTopicKey:
    """Tests for splitting a topic key."""

    def test_round_trip(self) -> None:
        """Parsing recovers every component."""
        key = topic_key(2 * NANOSECONDS_PER_SECOND, ENCODED_TOPIC, STREAMING_KEY)
        parsed = parse_topic_key(key)
        assert parsed.interval_ns == 2 * NANOSECONDS_PER_SECOND
        assert parsed.topic == ENCODED_TOPIC
        assert parsed.streaming_key == ChannelKey.parse(STREAMING_KEY)
        assert parsed.org_id == 1
        assert parsed.topic_key == key

    def test_topic_with_slashes(self) -> None:
        """Token-encoded topics may span several segments."""
        parsed = parse_topic_key(f"1s/sensors/__PLUS__/temp/{STREAMING_KEY}")
        assert parsed.topic == "sensors/__PLUS__/temp"

    @pytest.mark.parametrize("org", ["0", "1", "42", "-7"])
    def test_accepted_key_rebuilds_same_text(self, org: str) -> None:
        """A canonical topic key rebuilds to exactly the text it was parsed from."""
        key = f"1m30s/{ENCODED_TOPIC}/{UID}/123456789abcdef0/{org}"
        assert parse_topic_key(key).topic_key == key

    @pytest.mark.parametrize(
        "key, match",
        [
            ("1s/uid/123456789abcdef0/1", "Invalid topic key"),
            (f"soon/{ENCODED_TOPIC}/{STREAMING_KEY}", "Invalid interval"),
            (f"1s/{ENCODED_TOPIC}/uid/nothex/1", "Invalid streaming key"),
            (f"1s/{ENCODED_TOPIC}/uid/123456789abcdef0/one", "Invalid streaming key"),
            (f"1s/{ENCODED_TOPIC}/uid/123456789abcdef0/1_0", "Invalid streaming key"),
            (f"1s/{ENCODED_TOPIC}/uid/123456789abcdef0/+1", "Invalid streaming key"),
            (f"1s/{ENCODED_TOPIC}/uid/123456789abcdef0/01", "Invalid streaming key"),
            (f"1s//{STREAMING_KEY}", "Missing topic"),
        ],
    )
    def test_rejects(self, key: str, match: str) -> None:
        """Malformed keys raise `ChannelPathError`."""
        with pytest.raises(ChannelPathError, match=match):
            parse_topic_key(key)


class TestParseChannelPath:
    """Tests for parsing full channel paths."""

    def test_parse(self) -> None:
        """The data source prefix is stripped before parsing."""
        path = f"ds/{UID}/1s/{ENCODED_TOPIC}/{STREAMING_KEY}"
        parsed = parse_channel_path(path, UID)
        assert isinstance(parsed, ChannelPath)
        assert parsed.topic == ENCODED_TOPIC

    def test_wrong_data_source(self) -> None:
        """Paths for another data source are rejected."""
        path = f"ds/other/1s/{ENCODED_TOPIC}/{STREAMING_KEY}"
        with pytest.raises(ChannelPathError, match="is not under"):
            parse_channel_path(path, UID)


class TestAuthorizeSubscription:
    """Tests for the org check performed on subscribe."""

    PATH = f"ds/{UID}/1s/{ENCODED_TOPIC}/mqtt-uid/123456789abcdef0/42"

    def test_same_org_allowed(self) -> None:
        """Subscribers from the owning org are let in."""
        parsed = authorize_subscription(self.PATH, UID, 42)
        assert parsed.org_id == 42

    def test_other_org_denied(self) -> None:
        """Subscribers from another org are refused."""
        with pytest.raises(OrgMismatchError) as exc_info:
            authorize_subscription(self.PATH, UID, 1)
        assert exc_info.value.expected == 1
        assert exc_info.value.actual == 42

    def test_mismatch_is_a_path_error(self) -> None:
        """Callers catching `ChannelPathError` also see org mismatches."""
        with pytest.raises(ChannelPathError):
            authorize_subscription(self.PATH, UID, 7)

    def test_malformed_path(self) -> None:
        """Paths without an org segment cannot be authorized."""
        with pytest.raises(ChannelPathError):
            authorize_subscription(f"ds/{UID}/1s", UID, 42)

    @pytest.mark.parametrize("org", ["4_2", "042", "+42", " 42"])
    def test_non_canonical_org_denied(self, org: str) -> None:
        """An org segment that only parses loosely to the caller's org is refused."""
        path = f"ds/{UID}/1s/{ENCODED_TOPIC}/mqtt-uid/123456789abcdef0/{org}"
        with pytest.raises(ChannelPathError, match="Invalid streaming key"):
            authorize_subscription(path, UID, 42)
