"""
Logger setup for the Chipp integration kit
"""

import logging
from typing import Optional

from .config import LoggingConfig


def setup_logger(
    name: str = "chipp",
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None
) -> logging.Logger:
    """
    Configure a logger from LoggingConfig

    Calling it again for the same name does not add duplicate handlers.

    Args:
        name: Logger name (usually the package or app name)
        level: Level override, e.g. "DEBUG"
        config: Logging config (loaded from env if not provided)

    Returns:
        Configured logger
    """
    if config is None:
        config = LoggingConfig.from_env()

    logger = logging.getLogger(name)
    logger.setLevel((level or config.log_level).upper())

    if getattr(logger, "_chipp_configured", False):
        return logger

    formatter = logging.Formatter(config.log_format)

    if config.enable_console:
        console = logging.StreamHandler()
        console.setFormatter(formatter)
        logger.addHandler(console)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    logger._chipp_configured = True
    logger.debug(f"Logger '{name}' configured ({config.environment})")
    return logger


__all__ = ["setup_logger"]
