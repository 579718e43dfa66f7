"""
Deployment configuration for channel derivation.

A deployment chooses one topic encoding and one digest backend. Both are
fixed for the lifetime of the process and read from the environment:

    MQTT_LIVE_TOPIC_ENCODING   "base64" (default) or "token"
    MQTT_LIVE_DIGEST_BACKEND   "auto" (default), "native" or "software"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from typing_extensions import Self

from .channel.query import QueryPreparer
from .channel.topic import TopicEncoding, get_codec
from .sha1 import DigestBackend, select_provider
from .types import StrictBaseModel

TOPIC_ENCODING_ENV: Final = "MQTT_LIVE_TOPIC_ENCODING"
"""Environment variable selecting the topic encoding."""

DIGEST_BACKEND_ENV: Final = "MQTT_LIVE_DIGEST_BACKEND"
"""Environment variable selecting the digest backend."""


def _read_choice(environ: Mapping[str, str], name: str, default: str, supported: list[str]) -> str:
    value = environ.get(name, default).lower()
    if value not in supported:
        raise ValueError(
            f"Invalid {name} environment variable: '{value}'. Supported values: {supported}"
        )
    return value


class ChannelConfig(StrictBaseModel):
    """Process-wide choices for topic encoding and digest backend."""

    topic_encoding: TopicEncoding = TopicEncoding.BASE64
    """How topics are made safe for channel paths."""

    digest_backend: DigestBackend = DigestBackend.AUTO
    """Which SHA-1 implementation backs the streaming keys."""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """
        Build a config from environment variables.

        Args:
            environ: Variables to read. Defaults to `os.environ`.

        Raises:
            ValueError: If a variable holds an unsupported value.
        """
        env = os.environ if environ is None else environ
        encoding = _read_choice(
            env, TOPIC_ENCODING_ENV, TopicEncoding.BASE64.value, [e.value for e in TopicEncoding]
        )
        backend = _read_choice(
            env, DIGEST_BACKEND_ENV, DigestBackend.AUTO.value, [b.value for b in DigestBackend]
        )
        return cls(topic_encoding=TopicEncoding(encoding), digest_backend=DigestBackend(backend))

    def build_preparer(self, data_source_uid: str | None, org_id: int) -> QueryPreparer:
        """Select the digest provider and codec once and bind them to a preparer."""
        return QueryPreparer(
            data_source_uid=data_source_uid,
            org_id=org_id,
            provider=select_provider(self.digest_backend),
            codec=get_codec(self.topic_encoding),
        )
