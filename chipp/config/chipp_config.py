#!/usr/bin/env python3
"""Chipp integration configuration

Settings an integrating application needs to reach the hosted credit service.
The API key follows the documented ``CHIPP_API_KEY`` naming convention.
"""
import os
from dataclasses import dataclass, field
from typing import Optional

from .logging_config import LoggingConfig

DEFAULT_API_URL = "https://api.chipp.ai"
DEFAULT_TIMEOUT = 30.0


def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class ChippConfig:
    """Credit service connection settings"""

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT

    # Where checkout sends the user back after buying credits
    default_return_url: Optional[str] = None

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'ChippConfig':
        """Load Chipp configuration from environment variables"""
        return cls(
            api_key=os.getenv("CHIPP_API_KEY", "").strip(),
            api_url=os.getenv("CHIPP_API_URL", DEFAULT_API_URL).rstrip("/"),
            timeout=_float(os.getenv("CHIPP_TIMEOUT", ""), DEFAULT_TIMEOUT),
            default_return_url=os.getenv("CHIPP_RETURN_URL") or None,
            logging=LoggingConfig.from_env(),
        )

    def require_api_key(self) -> str:
        """
        Return the API key, failing loudly when it is not configured.

        Raises:
            ChippConfigurationError: If CHIPP_API_KEY is empty
        """
        if not self.api_key:
            from ..protocols import ChippConfigurationError
            raise ChippConfigurationError(
                "CHIPP_API_KEY is not set; export it or add it to your env file"
            )
        return self.api_key
