"""
Logging configuration for the SonarQube exporter.

Environment Variables:
    EXPORTER_LOG_LEVEL - Log level (DEBUG, INFO, WARNING, ERROR). Default: INFO
"""

import logging
import os
import sys
from typing import Optional

ROOT_LOGGER = "sonarqube_exporter"

# Log a line per scrape or per upstream connection; only shown at DEBUG
NOISY_LOGGERS = ("aiohttp.access", "urllib3.connectionpool")


def setup_logging(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    name: str = ROOT_LOGGER,
) -> logging.Logger:
    """
    Setup logging for the exporter.

    Also raises access and connection-pool loggers to WARNING unless
    running at DEBUG.

    Args:
        level: Log level. Default from EXPORTER_LOG_LEVEL or INFO.
        format_string: Custom format. Default: timestamp + level + name + message.
        name: Logger name.

    Returns:
        Configured logger instance.
    """
    if level is None:
        level = os.getenv("EXPORTER_LOG_LEVEL", "INFO")
    level = level.upper()

    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level, logging.INFO))

    # Clear existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level, logging.INFO))
    handler.setFormatter(logging.Formatter(format_string, datefmt="%Y-%m-%d %H:%M:%S"))

    logger.addHandler(handler)

    noisy_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(noisy_level)

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Get a logger in the exporter hierarchy.

    Args:
        name: Logger name (prefixed with 'sonarqube_exporter.' if not already)

    Returns:
        Logger instance.
    """
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
