#!/usr/bin/env python3
"""Configuration for the Chipp integration kit

Configuration hierarchy:
- chipp_config: API key, API URL, timeout, checkout return URL
- logging_config: Logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .chipp_config import ChippConfig, DEFAULT_API_URL, DEFAULT_TIMEOUT

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": ".env",
    "dev": ".env",
    "testing": ".env.test",
    "test": ".env.test",
    "staging": ".env.staging",
    "production": ".env.production",
}
env_file = os.getenv("CHIPP_ENV_FILE") or env_files.get(env, ".env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = ChippConfig.from_env()

def get_settings() -> ChippConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> ChippConfig:
    """Reload settings from environment"""
    global settings
    settings = ChippConfig.from_env()
    return settings

__all__ = [
    'ChippConfig',
    'LoggingConfig',
    'DEFAULT_API_URL',
    'DEFAULT_TIMEOUT',
    'get_settings',
    'reload_settings',
    'settings',
]
