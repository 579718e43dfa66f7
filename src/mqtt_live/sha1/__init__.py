"""SHA-1 digests with a native and a pure Python backend.

Usage::

    from mqtt_live.sha1 import DigestBackend, select_provider

    # Pick the backend once at startup
    provider = select_provider(DigestBackend.AUTO)

    # Pass the provider to whatever needs digests
    digest = provider.digest(b"abc")

Both backends produce identical output for identical input.

The implementation follows RFC 3174:
https://www.rfc-editor.org/rfc/rfc3174
"""

from __future__ import annotations

from .provider import (
    AsyncDigestProvider,
    DigestBackend,
    DigestProvider,
    NativeDigestProvider,
    SoftwareDigestProvider,
    ThreadedDigestProvider,
    select_provider,
)
from .software import compress_block, expand_schedule, pad_message, sha1

__all__ = [
    # Core API
    "sha1",
    # Building blocks
    "pad_message",
    "expand_schedule",
    "compress_block",
    # Providers
    "AsyncDigestProvider",
    "DigestBackend",
    "DigestProvider",
    "NativeDigestProvider",
    "SoftwareDigestProvider",
    "ThreadedDigestProvider",
    "select_provider",
]
