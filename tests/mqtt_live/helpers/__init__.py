"""Test helpers for mqtt_live unit tests."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import TypeVar

from .mocks import AsyncStubDigestProvider, StubDigestProvider, digest_with_prefix

_T = TypeVar("_T")


def run_async(coro: Coroutine[object, object, _T]) -> _T:
    """Run an async coroutine synchronously."""
    return asyncio.run(coro)


__all__ = [
    "AsyncStubDigestProvider",
    "StubDigestProvider",
    "digest_with_prefix",
    "run_async",
]
