"""
Chipp Client Factory

Builds a ChippClient from settings.
This is the ONLY module that wires configuration into the concrete client.
"""

import logging
from typing import Optional

import httpx

from .client import ChippClient
from .config import ChippConfig, get_settings

logger = logging.getLogger(__name__)


def create_chipp_client(
    config: Optional[ChippConfig] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ChippClient:
    """
    Create ChippClient from configuration

    Args:
        config: Optional config (global settings if not provided)
        http_client: Optional shared httpx client

    Returns:
        Ready-to-use ChippClient

    Raises:
        ChippConfigurationError: If CHIPP_API_KEY is not configured
    """
    if config is None:
        config = get_settings()

    api_key = config.require_api_key()

    client = ChippClient(
        api_key=api_key,
        base_url=config.api_url,
        timeout=config.timeout,
        http_client=http_client,
    )
    logger.info(f"ChippClient created for {config.api_url}")
    return client


__all__ = ["create_chipp_client"]
