"""Test doubles for the Chipp integration kit"""
from .http_mock import MockHttpClient, MockHttpResponse
from .chipp_mock import MockChippClient

TEST_API_KEY = "test_chipp_key"
TEST_API_URL = "https://api.chipp.test"

__all__ = ["MockHttpClient", "MockHttpResponse", "MockChippClient", "TEST_API_KEY", "TEST_API_URL"]
