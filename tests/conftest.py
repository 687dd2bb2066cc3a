"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import httpx
import pytest

from couch_tools.client.config import CouchConfig
from couch_tools.client.http import HTTPTransport
from couch_tools.client.paths import Revision
from couch_tools.client.testing import MockTransport

REV_1 = "1-1234567890abcdef1234567890abcdef"


@pytest.fixture
def config():
    """Create a test config for HTTP transport."""
    return CouchConfig(
        url="http://localhost:5984",
        timeout=10.0,
    )


@pytest.fixture
def rev():
    """A first-generation revision."""
    return Revision.parse(REV_1)


@pytest.fixture
def mock_transport():
    """Create an in-memory transport with no queued responses."""
    return MockTransport()


@pytest.fixture
def http_transport(config):
    """Create an HTTPTransport whose httpx client answers from a handler.

    Returns a (transport, handler) pair. Set ``handler.return_value`` or
    ``handler.side_effect`` to control responses; ``handler.call_args``
    holds the httpx.Request that was sent.
    """
    handler = MagicMock(return_value=httpx.Response(200, json={"ok": True}))
    client = httpx.Client(base_url=config.url, transport=httpx.MockTransport(handler))
    transport = HTTPTransport(config, client=client)
    yield transport, handler
    transport.close()


@pytest.fixture
def mock_api():
    """Create a mock CouchAPI usable as a context manager."""
    api = MagicMock()
    api.__enter__ = MagicMock(return_value=api)
    api.__exit__ = MagicMock(return_value=False)
    return api
