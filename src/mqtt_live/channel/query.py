"""
Query preparation.

Just before queries are dispatched to the backend, each one receives a
streaming key and has its topic canonicalized. The key is always derived from
the resolved topic, before encoding, so switching the topic encoding never
changes which channel a query maps to.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..sha1 import AsyncDigestProvider, DigestProvider, ThreadedDigestProvider
from ..types import StrictBaseModel
from .key import derive_streaming_key, derive_streaming_key_async
from .topic import TopicCodec

logger = logging.getLogger(__name__)


class MqttQuery(StrictBaseModel):
    """A single MQTT query as exchanged with the host (camelCase on the wire)."""

    ref_id: str
    """Host-assigned query identifier within a request."""

    topic: str | None = None
    """Broker topic, possibly containing `+` / `#` wildcards."""

    stream: bool = True
    """Whether results are delivered over a live channel."""

    streaming_key: str | None = None
    """Channel correlation key, filled in by `QueryPreparer`."""


class QueryPreparer:
    """
    Attaches streaming keys and canonical topics to outgoing queries.

    All context is supplied at construction. The same preparer can be shared
    between concurrent requests since it holds no mutable state.
    """

    def __init__(
        self,
        data_source_uid: str | None,
        org_id: int,
        provider: DigestProvider,
        codec: TopicCodec,
        async_provider: AsyncDigestProvider | None = None,
    ) -> None:
        """
        Args:
            data_source_uid: Uid written at the front of every key.
            org_id: Org written at the end of every key.
            provider: Digest used by `prepare`.
            codec: Topic encoding applied after the key is derived.
            async_provider: Digest used by `prepare_async`. Defaults to
                `provider` run in a worker thread.
        """
        self.data_source_uid = data_source_uid
        self.org_id = org_id
        self.provider = provider
        self.codec = codec
        self.async_provider = async_provider or ThreadedDigestProvider(provider)

    def attach_streaming_key(self, query: MqttQuery) -> MqttQuery:
        """Return a copy of `query` with its streaming key set."""
        key = derive_streaming_key(
            self.data_source_uid, query.topic, self.org_id, provider=self.provider
        )
        return query.model_copy(update={"streaming_key": key})

    def canonicalize_topic(self, query: MqttQuery) -> MqttQuery:
        """Return a copy of `query` with its topic encoded by the configured codec."""
        if query.topic is None:
            return query
        return query.model_copy(update={"topic": self.codec.encode(query.topic)})

    def prepare(self, queries: Iterable[MqttQuery]) -> list[MqttQuery]:
        """Attach keys and canonicalize topics for every query, preserving order."""
        prepared = [self.canonicalize_topic(self.attach_streaming_key(q)) for q in queries]
        self._log_prepared(prepared, self.provider.name)
        return prepared

    async def prepare_async(self, queries: Iterable[MqttQuery]) -> list[MqttQuery]:
        """Async variant of `prepare`, hashing through `async_provider`."""
        prepared = []
        for query in queries:
            key = await derive_streaming_key_async(
                self.data_source_uid, query.topic, self.org_id, provider=self.async_provider
            )
            prepared.append(self.canonicalize_topic(query.model_copy(update={"streaming_key": key})))
        self._log_prepared(prepared, self.async_provider.name)
        return prepared

    def _log_prepared(self, prepared: list[MqttQuery], digest_name: str) -> None:
        logger.debug(
            "Prepared %d queries (encoding=%s, digest=%s)",
            len(prepared),
            self.codec.encoding.value,
            digest_name,
        )
