"""
Streaming key derivation.

A streaming key correlates a query with the live channel that delivers its
messages. It has three slash-separated segments::

    <dataSourceUid>/<fingerprint>/<orgId>

- The data source uid scopes the key to one configured broker.
- The fingerprint is the first 8 bytes of SHA-1 over the query's canonical
  JSON, written as 16 lowercase hex characters.
- The org id scopes the key to one tenant, so identical queries from two
  organizations never share a channel.

The fingerprint is not a security boundary. It only has to make collisions
between distinct queries vanishingly unlikely.
"""

from __future__ import annotations

import json
import re
from typing import Final

from pydantic import Field
from typing_extensions import Annotated, Self

from ..sha1 import AsyncDigestProvider, DigestProvider
from ..types import ChannelKeyError, Digest, StrictBaseModel

FINGERPRINT_BYTES: Final = 8
"""Number of leading digest bytes kept in the key."""

MISSING_IDENTIFIER: Final = "undefined"
"""Placeholder written when no data source uid is supplied."""

_ORG_ID_PATTERN: Final = re.compile(r"0|-?[1-9][0-9]*")
"""Canonical ASCII decimal, the form `str(int)` writes."""

_FINGERPRINT_PATTERN: Final = re.compile(r"[0-9a-f]{16}")

Fingerprint = Annotated[str, Field(pattern=r"^[0-9a-f]{16}$")]
"""Sixteen lowercase hex characters."""


def canonical_query_json(topic: str | None) -> str:
    """
    Serialize the fields that identify a query.

    The output is compact JSON with non-ASCII characters left unescaped. A
    missing topic omits the field entirely, giving `{}`.
    """
    fields = {} if topic is None else {"topic": topic}
    return json.dumps(fields, separators=(",", ":"), ensure_ascii=False)


def fingerprint(digest: Digest) -> str:
    """Hex-encode the first 8 bytes of `digest`, two characters per byte."""
    return "".join(f"{b:02x}" for b in digest.prefix(FINGERPRINT_BYTES))


class ChannelKey(StrictBaseModel):
    """A parsed streaming key."""

    data_source_uid: str
    """Uid of the data source instance, passed through verbatim."""

    fingerprint: Fingerprint
    """Truncated query digest."""

    org_id: int
    """Organization the query runs for."""

    def __str__(self) -> str:
        return f"{self.data_source_uid}/{self.fingerprint}/{self.org_id}"

    @classmethod
    def parse(cls, text: str) -> Self:
        """
        Parse a key produced by `derive_streaming_key`.

        Segments are read from the right, so a uid containing `/` survives.

        Raises:
            ChannelKeyError: If the fingerprint or org id is malformed. The org
                id must be written exactly as `str(org_id)` would write it.
        """
        parts = text.rsplit("/", 2)
        if len(parts) != 3:
            raise ChannelKeyError(f"Streaming key needs 3 segments, got {len(parts)}: {text!r}")

        uid, fp, org = parts
        if not _FINGERPRINT_PATTERN.fullmatch(fp):
            raise ChannelKeyError(f"Invalid fingerprint {fp!r} in streaming key")
        if not _ORG_ID_PATTERN.fullmatch(org):
            raise ChannelKeyError(f"Invalid org id {org!r} in streaming key")

        return cls(data_source_uid=uid, fingerprint=fp, org_id=int(org))


def _assemble(data_source_uid: str | None, digest: Digest, org_id: int) -> str:
    uid = MISSING_IDENTIFIER if data_source_uid is None else data_source_uid
    return f"{uid}/{fingerprint(digest)}/{org_id}"


def derive_streaming_key(
    data_source_uid: str | None,
    topic: str | None,
    org_id: int,
    *,
    provider: DigestProvider,
) -> str:
    """
    Compute the streaming key for a query.

    Args:
        data_source_uid: Data source instance uid. `None` becomes "undefined".
        topic: The resolved (not yet encoded) topic, or `None`.
        org_id: Organization the query runs for.
        provider: Digest backend selected at startup.

    Returns:
        `"{data_source_uid}/{fingerprint}/{org_id}"`.
    """
    message = canonical_query_json(topic).encode("utf-8")
    return _assemble(data_source_uid, provider.digest(message), org_id)


async def derive_streaming_key_async(
    data_source_uid: str | None,
    topic: str | None,
    org_id: int,
    *,
    provider: AsyncDigestProvider,
) -> str:
    """Async variant of `derive_streaming_key` for providers that may suspend."""
    message = canonical_query_json(topic).encode("utf-8")
    return _assemble(data_source_uid, await provider.digest(message), org_id)
