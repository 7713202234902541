"""Pytest hooks and fixtures."""

import os

import httpx
import pytest

from palytt_client.transport import APIClient

from tests.helpers import BASE_URL, RecordingHandler


def pytest_configure(config):
    """Register custom markers (also in pyproject.toml)."""
    config.addinivalue_line(
        "markers",
        "requires_backend: talks to a live Palytt backend (skipped in CI)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip requires_backend tests in CI or when no backend URL is configured."""
    if os.environ.get("CI") != "true" and os.environ.get("PALYTT_LIVE_BASE_URL"):
        return
    skip = pytest.mark.skip(reason="Requires a live backend (set PALYTT_LIVE_BASE_URL)")
    for item in items:
        if "requires_backend" in item.keywords:
            item.add_marker(skip)


@pytest.fixture
def make_api_client():
    """Build an ``APIClient`` over ``httpx.MockTransport``; returns (client, handler)."""

    def factory(responder, auth_provider=None, **kwargs):
        handler = RecordingHandler(responder)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = APIClient(BASE_URL, auth_provider, http_client=http_client, **kwargs)
        return client, handler

    return factory
