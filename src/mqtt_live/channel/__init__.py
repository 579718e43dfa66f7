"""Streaming keys, topic canonicalization and live channel paths."""

from .duration import format_duration, parse_duration
from .key import (
    FINGERPRINT_BYTES,
    MISSING_IDENTIFIER,
    ChannelKey,
    canonical_query_json,
    derive_streaming_key,
    derive_streaming_key_async,
    fingerprint,
)
from .path import (
    ChannelPath,
    authorize_subscription,
    channel_path,
    channel_prefix,
    is_valid_channel_path,
    join_path,
    parse_channel_path,
    parse_topic_key,
    topic_key,
)
from .query import MqttQuery, QueryPreparer
from .topic import (
    HASH_TOKEN,
    PLUS_TOKEN,
    Base64TopicCodec,
    TokenTopicCodec,
    TopicCodec,
    TopicEncoding,
    canonicalize,
    get_codec,
)

__all__ = [
    # Keys
    "FINGERPRINT_BYTES",
    "MISSING_IDENTIFIER",
    "ChannelKey",
    "canonical_query_json",
    "derive_streaming_key",
    "derive_streaming_key_async",
    "fingerprint",
    # Topics
    "HASH_TOKEN",
    "PLUS_TOKEN",
    "Base64TopicCodec",
    "TokenTopicCodec",
    "TopicCodec",
    "TopicEncoding",
    "canonicalize",
    "get_codec",
    # Intervals
    "format_duration",
    "parse_duration",
    # Paths
    "ChannelPath",
    "authorize_subscription",
    "channel_path",
    "channel_prefix",
    "is_valid_channel_path",
    "join_path",
    "parse_channel_path",
    "parse_topic_key",
    "topic_key",
    # Queries
    "MqttQuery",
    "QueryPreparer",
]
