"""Exception hierarchy for channel key derivation and topic handling."""

from __future__ import annotations


class ChannelError(Exception):
    """
    Base exception for all channel-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class DigestUnavailableError(ChannelError):
    """Raised when a requested digest backend is not exposed by the runtime."""


class TopicDecodingError(ChannelError):
    """Raised when an encoded topic cannot be turned back into a broker topic."""


class DurationError(ChannelError):
    """Raised when an interval string is not a valid duration."""


class ChannelKeyError(ChannelError):
    """Raised when a streaming key string does not have the expected shape."""


class ChannelPathError(ChannelError):
    """Raised when a channel path is malformed or contains disallowed characters."""


class OrgMismatchError(ChannelPathError):
    """
    Raised when a channel path belongs to a different organization.

    Attributes:
        expected: The organization the caller is acting for.
        actual: The organization embedded in the channel path.
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Channel belongs to org {actual}, caller is org {expected}")
