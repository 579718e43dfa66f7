"""
Live channel paths.

A query's results are streamed on a channel whose path is built from the data
source, the query interval, the encoded topic and the streaming key::

    ds/<uid>/<interval>/<topic>/<keyUid>/<fingerprint>/<orgId>
    \\______/ \\_______________________________________________/
     prefix                     topic key

Example::

    ds/mqtt-uid/1s/c2Vuc29ycy90ZW1w/mqtt-uid/123456789abcdef0/1

The host only allows `[A-Za-z0-9_-/=.]` in channel paths, which is why topics
are canonicalized first. When a client subscribes, the org id embedded at the
end of the path is compared against the caller's organization.
"""

from __future__ import annotations

import logging
import posixpath
import re
from typing import Final

from ..types import (
    ChannelKeyError,
    ChannelPathError,
    DurationError,
    OrgMismatchError,
    StrictBaseModel,
)
from .duration import format_duration, parse_duration
from .key import ChannelKey

logger = logging.getLogger(__name__)

CHANNEL_SCOPE: Final = "ds"
"""Scope segment for data source channels."""

_ALLOWED_CHANNEL_PATH: Final = re.compile(r"[A-Za-z0-9_\-/=.]*")

_MIN_TOPIC_KEY_SEGMENTS: Final = 5
"""Interval, at least one topic segment, and the three streaming key segments."""


def join_path(*elements: str) -> str:
    """
    Join slash-separated path elements and clean the result.

    Empty elements are ignored. Repeated slashes collapse, `.` segments
    vanish, `..` removes the preceding segment, and trailing slashes are
    dropped. Joining nothing but empty elements gives `""`.
    """
    joined = "/".join(e for e in elements if e)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    # POSIX keeps a leading double slash; URL-style paths do not.
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def topic_key(interval_ns: int, topic: str, streaming_key: str) -> str:
    """
    Build the per-query part of a channel path.

    Args:
        interval_ns: Query interval in nanoseconds.
        topic: The canonicalized topic.
        streaming_key: Key from `derive_streaming_key`.
    """
    return join_path(format_duration(interval_ns), topic, streaming_key)


def channel_prefix(data_source_uid: str) -> str:
    """Return `ds/<uid>`, the prefix shared by all channels of a data source."""
    return f"{CHANNEL_SCOPE}/{data_source_uid}"


def is_valid_channel_path(path: str) -> bool:
    """Check that `path` only uses characters the host accepts."""
    return _ALLOWED_CHANNEL_PATH.fullmatch(path) is not None


def channel_path(data_source_uid: str, key: str) -> str:
    """
    Build the full channel path for a topic key.

    Raises:
        ChannelPathError: If the result contains characters the host rejects.
    """
    path = join_path(channel_prefix(data_source_uid), key)
    if not is_valid_channel_path(path):
        raise ChannelPathError(f"Channel path contains disallowed characters: {path!r}")
    return path


class ChannelPath(StrictBaseModel):
    """The components of a parsed channel path."""

    interval_ns: int
    """Tick interval of the stream in nanoseconds."""

    topic: str
    """Topic as it appears in the path, still canonicalized."""

    streaming_key: ChannelKey
    """Query correlation key, including the owning org."""

    @property
    def org_id(self) -> int:
        """Organization that owns the channel."""
        return self.streaming_key.org_id

    @property
    def topic_key(self) -> str:
        """Rebuild the topic key this path was parsed from."""
        return topic_key(self.interval_ns, self.topic, str(self.streaming_key))


def parse_topic_key(key: str) -> ChannelPath:
    """
    Split a topic key into interval, topic and streaming key.

    The interval is the first segment and the streaming key is the last
    three. Everything in between is the topic, which may itself contain
    slashes when the token encoding is in use.

    Raises:
        ChannelPathError: If the key has too few segments, or if the interval
            or streaming key is malformed.
    """
    parts = key.split("/")
    if len(parts) < _MIN_TOPIC_KEY_SEGMENTS:
        raise ChannelPathError(f"Invalid topic key: {key!r}")

    try:
        interval_ns = parse_duration(parts[0])
    except DurationError as e:
        raise ChannelPathError(f"Invalid interval in topic key {key!r}: {e.message}") from e

    try:
        streaming_key = ChannelKey.parse("/".join(parts[-3:]))
    except ChannelKeyError as e:
        raise ChannelPathError(f"Invalid streaming key in topic key {key!r}: {e.message}") from e

    topic = "/".join(parts[1:-3])
    if not topic:
        raise ChannelPathError(f"Missing topic in topic key: {key!r}")

    return ChannelPath(interval_ns=interval_ns, topic=topic, streaming_key=streaming_key)


def parse_channel_path(path: str, data_source_uid: str) -> ChannelPath:
    """
    Parse a full channel path belonging to `data_source_uid`.

    Raises:
        ChannelPathError: If the path is not under this data source's prefix
            or its topic key is malformed.
    """
    prefix = channel_prefix(data_source_uid) + "/"
    if not path.startswith(prefix):
        raise ChannelPathError(f"Channel {path!r} is not under {prefix!r}")
    return parse_topic_key(path[len(prefix) :])


def authorize_subscription(path: str, data_source_uid: str, org_id: int) -> ChannelPath:
    """
    Check that a subscriber from `org_id` may join the channel at `path`.

    Returns:
        The parsed channel path.

    Raises:
        ChannelPathError: If the path is malformed.
        OrgMismatchError: If the channel belongs to another organization.
    """
    parsed = parse_channel_path(path, data_source_uid)
    if parsed.org_id != org_id:
        logger.debug("Rejected subscription to %s for org %s", path, org_id)
        raise OrgMismatchError(expected=org_id, actual=parsed.org_id)
    logger.debug("Authorized subscription to %s for org %s", path, org_id)
    return parsed
