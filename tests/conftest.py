"""
Shared fixtures for billwerk_client tests.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

import httpx
import respx

from billwerk_client.config import ClientConfig
from billwerk_client.types import RequestContext


@pytest.fixture
def sample_client_config():
    """Sample ClientConfig for testing."""
    return ClientConfig(api_key="priv_0123456789abcdef", base_url="https://api.example.com/v1")


@pytest.fixture
def background_context():
    return RequestContext.background()


@pytest.fixture
def router():
    """respx router, wired into clients through httpx.MockTransport."""
    return respx.MockRouter(assert_all_called=False)


@pytest.fixture
def mock_httpx_sync_client():
    """Mock httpx.Client for testing."""
    client = MagicMock(spec=httpx.Client)
    client.close = MagicMock()
    client.timeout = httpx.Timeout(5.0)
    return client


@pytest.fixture
def mock_httpx_async_client():
    """Mock httpx.AsyncClient for testing."""
    client = AsyncMock(spec=httpx.AsyncClient)
    client.aclose = AsyncMock()
    client.timeout = httpx.Timeout(5.0)
    return client
