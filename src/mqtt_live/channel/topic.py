"""
Topic canonicalization.

MQTT topics may contain characters the host refuses in live channel paths,
most notably the wildcards `+` and `#`. Before a query is dispatched its topic
is rewritten into a safe form, and the backend reverses the rewrite before
subscribing.

Two encodings exist. They are not compatible with each other, so a deployment
picks exactly one.


BASE64 (default)
----------------
URL- and filename-safe base64 without padding (RFC 4648 section 5)::

    "test/topic+/and:more"  ->  "dGVzdC90b3BpYysvYW5kOm1vcmU"

Opaque but reversible, and safe for any topic.


TOKEN
-----
Literal substitution of the two wildcard characters::

    "sensors/+/temp/#"  ->  "sensors/__PLUS__/temp/__HASH__"

Human-readable. It only guards against `+` and `#`, and a topic that already
contains a sentinel cannot be told apart from an encoded one.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Final

from ..types import TopicDecodingError

logger = logging.getLogger(__name__)

PLUS_TOKEN: Final = "__PLUS__"
"""Sentinel replacing the single-level wildcard `+`."""

HASH_TOKEN: Final = "__HASH__"
"""Sentinel replacing the multi-level wildcard `#`."""

_URLSAFE_ALPHABET: Final = re.compile(r"[A-Za-z0-9_-]*")


class TopicEncoding(str, Enum):
    """Available topic canonicalization strategies."""

    BASE64 = "base64"
    """Unpadded URL-safe base64 of the UTF-8 topic."""

    TOKEN = "token"
    """`+` and `#` replaced by sentinel tokens."""


class TopicCodec(ABC):
    """Reversible rewrite between a broker topic and a channel-safe string."""

    encoding: TopicEncoding

    @abstractmethod
    def encode(self, topic: str) -> str:
        """Rewrite a broker topic into its channel-safe form."""

    @abstractmethod
    def decode(self, encoded: str) -> str:
        """Recover the broker topic from its channel-safe form."""


class Base64TopicCodec(TopicCodec):
    """Unpadded URL-safe base64."""

    encoding = TopicEncoding.BASE64

    def encode(self, topic: str) -> str:
        encoded = base64.b64encode(topic.encode("utf-8")).decode("ascii")
        return encoded.replace("+", "-").replace("/", "_").rstrip("=")

    def decode(self, encoded: str) -> str:
        """
        Decode the first path segment of `encoded`.

        Decoding is strict: padding, characters outside the URL-safe alphabet,
        and impossible lengths are all rejected.

        Raises:
            TopicDecodingError: If the segment is not valid unpadded base64url,
                or does not decode to UTF-8.
        """
        segment = encoded.split("/", 1)[0]
        logger.debug("Decoding topic segment %s", segment[:32])

        if not _URLSAFE_ALPHABET.fullmatch(segment):
            raise TopicDecodingError(f"Invalid character in encoded topic {segment!r}")

        # A single leftover character carries only 6 bits, less than a byte.
        if len(segment) % 4 == 1:
            raise TopicDecodingError(f"Invalid encoded topic length {len(segment)}")

        padded = segment + "=" * (-len(segment) % 4)
        try:
            raw = base64.urlsafe_b64decode(padded)
        except binascii.Error as e:
            raise TopicDecodingError(f"Invalid base64 in encoded topic: {e}") from e

        # Non-canonical trailing bits would let two strings decode to one topic.
        if self.encode_bytes(raw) != segment:
            raise TopicDecodingError(f"Non-canonical encoded topic {segment!r}")

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TopicDecodingError(f"Encoded topic is not UTF-8: {e}") from e

    @staticmethod
    def encode_bytes(raw: bytes) -> str:
        """Unpadded URL-safe base64 of arbitrary bytes."""
        return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


class TokenTopicCodec(TopicCodec):
    """Wildcard-to-sentinel substitution."""

    encoding = TopicEncoding.TOKEN

    def encode(self, topic: str) -> str:
        return topic.replace("+", PLUS_TOKEN).replace("#", HASH_TOKEN)

    def decode(self, encoded: str) -> str:
        return encoded.replace(PLUS_TOKEN, "+").replace(HASH_TOKEN, "#")


_CODECS: Final[dict[TopicEncoding, type[TopicCodec]]] = {
    TopicEncoding.BASE64: Base64TopicCodec,
    TopicEncoding.TOKEN: TokenTopicCodec,
}


def get_codec(encoding: TopicEncoding = TopicEncoding.BASE64) -> TopicCodec:
    """Return the codec for `encoding`."""
    return _CODECS[TopicEncoding(encoding)]()


def canonicalize(topic: str, encoding: TopicEncoding = TopicEncoding.BASE64) -> str:
    """Rewrite `topic` into a channel-safe string using `encoding`."""
    return get_codec(encoding).encode(topic)
