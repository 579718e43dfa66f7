"""
Digest providers.

A provider turns a message into a 20-byte SHA-1 digest. Two implementations
exist and are interchangeable:

- `NativeDigestProvider` delegates to the audited primitive shipped with the
  `cryptography` package (OpenSSL underneath).
- `SoftwareDigestProvider` runs the pure Python engine in `software.py`.

The choice is made once, by `select_provider`, and the resulting object is
passed to whoever needs digests. Callers never branch on the backend per call.

Async callers use `AsyncDigestProvider`. `ThreadedDigestProvider` adapts any
sync provider by moving the work off the event loop.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Protocol

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes

from ..types import Digest, DigestUnavailableError
from .software import sha1

logger = logging.getLogger(__name__)


class DigestBackend(str, Enum):
    """Which digest implementation a deployment should use."""

    AUTO = "auto"
    """Native when the runtime exposes it, software otherwise."""

    NATIVE = "native"
    """Require the platform primitive; fail at startup if it is missing."""

    SOFTWARE = "software"
    """Always use the pure Python engine."""


class DigestProvider(Protocol):
    """Synchronous SHA-1 capability."""

    @property
    def name(self) -> str:
        """Short backend label used in logs."""
        ...

    def digest(self, data: bytes) -> Digest:
        """Return the 20-byte SHA-1 digest of `data`."""
        ...


class AsyncDigestProvider(Protocol):
    """Asynchronous SHA-1 capability. Calls may suspend."""

    @property
    def name(self) -> str:
        """Short backend label used in logs."""
        ...

    async def digest(self, data: bytes) -> Digest:
        """Return the 20-byte SHA-1 digest of `data`."""
        ...


class NativeDigestProvider:
    """SHA-1 backed by `cryptography.hazmat.primitives.hashes`."""

    name = "native"

    @staticmethod
    def is_available() -> bool:
        """
        Check whether the runtime exposes SHA-1.

        Some OpenSSL builds (e.g. restricted FIPS configurations) refuse the
        algorithm. Construction fails with `UnsupportedAlgorithm` there.
        """
        try:
            hashes.Hash(hashes.SHA1())
        except UnsupportedAlgorithm:
            return False
        return True

    def digest(self, data: bytes) -> Digest:
        h = hashes.Hash(hashes.SHA1())
        h.update(bytes(data))
        return Digest(h.finalize())


class SoftwareDigestProvider:
    """SHA-1 computed by the pure Python engine. Never suspends."""

    name = "software"

    def digest(self, data: bytes) -> Digest:
        return sha1(data)


class ThreadedDigestProvider:
    """
    Async adapter around a synchronous provider.

    Each call runs in the default executor via `asyncio.to_thread`, so large
    messages do not block the event loop.
    """

    def __init__(self, inner: DigestProvider) -> None:
        self._inner = inner

    @property
    def name(self) -> str:
        return self._inner.name

    async def digest(self, data: bytes) -> Digest:
        return await asyncio.to_thread(self._inner.digest, data)


def select_provider(backend: DigestBackend = DigestBackend.AUTO) -> DigestProvider:
    """
    Pick the digest implementation for this process.

    Args:
        backend: The requested backend.

    Returns:
        A provider to be passed explicitly to key derivation.

    Raises:
        DigestUnavailableError: If `NATIVE` is requested but unavailable.
    """
    backend = DigestBackend(backend)

    if backend is DigestBackend.SOFTWARE:
        provider: DigestProvider = SoftwareDigestProvider()
    elif NativeDigestProvider.is_available():
        provider = NativeDigestProvider()
    elif backend is DigestBackend.NATIVE:
        raise DigestUnavailableError("Native SHA-1 is not available in this runtime")
    else:
        provider = SoftwareDigestProvider()

    logger.info("Selected %s SHA-1 provider (requested: %s)", provider.name, backend.value)
    return provider
