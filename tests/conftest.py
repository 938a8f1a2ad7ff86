"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - api/      : FastAPI routes and dependencies through TestClient
    - component/: Client, gate, balance state and CLI with mocked transport
    - unit/     : Models and configuration (pure, no I/O)
"""
import os
import sys
import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from tests.mocks import TEST_API_KEY, TEST_API_URL, MockChippClient, MockHttpClient


# =============================================================================
# Test Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "api: API contract tests")
    config.addinivalue_line("markers", "component: Component tests")
    config.addinivalue_line("markers", "unit: Unit tests")


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture
def mock_http() -> MockHttpClient:
    """httpx.AsyncClient stand-in"""
    return MockHttpClient()


@pytest.fixture
def chipp_client(mock_http):
    """ChippClient wired to the mock transport"""
    from chipp.client import ChippClient
    return ChippClient(api_key=TEST_API_KEY, base_url=TEST_API_URL, http_client=mock_http)


@pytest.fixture
def fake_chipp() -> MockChippClient:
    """In-memory credit service"""
    return MockChippClient()
