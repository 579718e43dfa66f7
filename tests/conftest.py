"""Pytest configuration and shared fixtures."""

import os

import pytest
from hypothesis import settings

from mqtt_live.config import DIGEST_BACKEND_ENV, TOPIC_ENCODING_ENV

# Create a profile named "no_deadline" with deadline disabled.
# The pure Python digest is slow enough to trip the default deadline.
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")


@pytest.fixture(autouse=True)
def _clean_channel_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep deployment settings from the developer's shell out of tests."""
    for name in (TOPIC_ENCODING_ENV, DIGEST_BACKEND_ENV):
        if name in os.environ:
            monkeypatch.delenv(name)
