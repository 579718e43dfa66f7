"""Value types, base models and exceptions shared across the package."""

from .base import StrictBaseModel
from .digest import DIGEST_LENGTH, Digest
from .exceptions import (
    ChannelError,
    ChannelKeyError,
    ChannelPathError,
    DigestUnavailableError,
    DurationError,
    OrgMismatchError,
    TopicDecodingError,
)

__all__ = [
    # Models
    "StrictBaseModel",
    # Digest
    "DIGEST_LENGTH",
    "Digest",
    # Exceptions
    "ChannelError",
    "ChannelKeyError",
    "ChannelPathError",
    "DigestUnavailableError",
    "DurationError",
    "OrgMismatchError",
    "TopicDecodingError",
]
