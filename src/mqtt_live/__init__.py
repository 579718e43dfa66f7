"""
Channel key derivation for MQTT live streaming.

Maps a query's topic, scoped to a data source and an organization, onto a
short stable streaming key, and rewrites topics into channel-safe form.
"""

from .channel import (
    ChannelKey,
    MqttQuery,
    QueryPreparer,
    TopicEncoding,
    canonicalize,
    derive_streaming_key,
    derive_streaming_key_async,
)
from .config import ChannelConfig
from .sha1 import DigestBackend, DigestProvider, select_provider, sha1

__all__ = [
    "ChannelConfig",
    "ChannelKey",
    "DigestBackend",
    "DigestProvider",
    "MqttQuery",
    "QueryPreparer",
    "TopicEncoding",
    "canonicalize",
    "derive_streaming_key",
    "derive_streaming_key_async",
    "select_provider",
    "sha1",
]
