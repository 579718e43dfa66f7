"""
Fixed-length digest value.

A SHA-1 digest is exactly 20 bytes. The `Digest` type enforces that length at
construction, so a provider can never hand back a truncated or oversized value
without failing loudly.
"""

from __future__ import annotations

from typing import Any, ClassVar, SupportsIndex

from typing_extensions import Self

DIGEST_LENGTH: int = 20
"""Size of a SHA-1 digest in bytes (160 bits)."""


class Digest(bytes):
    """Immutable 20-byte digest with strict length checking."""

    LENGTH: ClassVar[int] = DIGEST_LENGTH

    def __new__(cls, value: Any = b"") -> Self:
        """
        Create and validate a new digest.

        Args:
            value: `bytes`, `bytearray`, `memoryview`, or a hex string
                (with or without a '0x' prefix).

        Raises:
            ValueError: If the resulting byte length differs from `LENGTH`.
        """
        if isinstance(value, str):
            b = bytes.fromhex(value.removeprefix("0x"))
        else:
            b = bytes(value)
        if len(b) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(b)}")
        return super().__new__(cls, b)

    def prefix(self, length: int) -> bytes:
        """Return the first `length` bytes of the digest."""
        if not 0 <= length <= self.LENGTH:
            raise ValueError(f"Prefix length must be in [0, {self.LENGTH}], got {length}")
        return bytes(self[:length])

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()})"

    def __hash__(self) -> int:
        return hash((type(self), bytes(self)))

    def hex(self, sep: str | bytes | None = None, bytes_per_sep: SupportsIndex = 1) -> str:
        """Return the lowercase hexadecimal representation of the digest."""
        return bytes(self).hex() if sep is None else bytes(self).hex(sep, bytes_per_sep)
