"""Configuration module."""
from .settings import ConfigError, ExporterConfig, get_config, reset_config
from .logging import ROOT_LOGGER, get_logger, setup_logging

__all__ = [
    "ConfigError",
    "ExporterConfig",
    "get_config",
    "reset_config",
    "setup_logging",
    "get_logger",
    "ROOT_LOGGER",
]
