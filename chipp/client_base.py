"""
Base Client for the Hosted Credit Service

HTTP plumbing shared by Chipp clients: base URL, API-key headers,
connection lifecycle and timeouts.
"""

import httpx
import logging
from typing import Optional, Dict, Any

from . import __version__

logger = logging.getLogger(__name__)


class BaseChippClient:
    """
    Credit service client base

    Handles:
    1. Base URL normalisation
    2. Bearer API-key authentication
    3. HTTP client lifecycle
    4. Timeouts

    Example:
        class ChippClient(BaseChippClient):
            async def get_user(self, user_id: str):
                response = await self.post("/v1/users", json={"userId": user_id})
                return response.json()
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize the client

        Args:
            api_key: Chipp API key
            base_url: Credit service base URL
            timeout: Request timeout in seconds
            http_client: Pre-built client to share; the caller keeps ownership
        """
        if not api_key:
            raise ValueError(f"{self.__class__.__name__} requires an api_key")

        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.headers = self._build_default_headers(api_key)

        if http_client is not None:
            self.client = http_client
            self._owns_client = False
        else:
            self.client = httpx.AsyncClient(timeout=timeout, headers=self.headers)
            self._owns_client = True

        logger.debug(f"Initialized {self.__class__.__name__}: {self.base_url}")

    def _build_default_headers(self, api_key: str) -> Dict[str, str]:
        """
        Build default request headers

        Args:
            api_key: Chipp API key

        Returns:
            Headers dict
        """
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"chipp-credits-python/{__version__}"
        }

    async def close(self):
        """Close the HTTP client if this instance created it"""
        if self._owns_client:
            await self.client.aclose()
            logger.debug(f"Closed {self.__class__.__name__}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ========================================
    # HTTP helpers
    # ========================================

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """GET request"""
        url = f"{self.base_url}{path}"
        return await self.client.get(url, params=params, headers=self.headers)

    async def post(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """POST request"""
        url = f"{self.base_url}{path}"
        return await self.client.post(url, json=json, headers=self.headers)


__all__ = ["BaseChippClient"]
