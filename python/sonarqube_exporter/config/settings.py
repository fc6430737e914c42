"""
Exporter configuration with environment variable and CLI flag support.

Flags take precedence over environment variables.

Environment Variables:
    EXPORTER_HOST - Host to bind the exporter server (default: 0.0.0.0)
    EXPORTER_PORT - Port to bind the exporter server (default: 9090)
    EXPORTER_LOG_LEVEL - Log level (default: INFO)
    SONARQUBE_URL - SonarQube server URL (required)
    SONARQUBE_TOKEN - SonarQube authentication token (required)
"""

import argparse
import os
from dataclasses import dataclass, field
from typing import List, Optional, Sequence


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


def _get_port_from_env() -> int:
    value = os.getenv("EXPORTER_PORT", "9090")
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"EXPORTER_PORT must be an integer, got: {value!r}")


@dataclass
class ExporterConfig:
    """Exporter configuration."""

    # Server settings
    host: str = field(default_factory=lambda: os.getenv("EXPORTER_HOST", "0.0.0.0"))
    port: int = field(default_factory=_get_port_from_env)

    # SonarQube settings
    sonarqube_url: str = field(default_factory=lambda: os.getenv("SONARQUBE_URL", ""))
    sonarqube_token: str = field(default_factory=lambda: os.getenv("SONARQUBE_TOKEN", ""))

    # Logging
    log_level: str = field(
        default_factory=lambda: os.getenv("EXPORTER_LOG_LEVEL", "INFO").upper()
    )

    @property
    def address(self) -> str:
        """Full host:port address to bind the server."""
        return f"{self.host}:{self.port}"

    def validate(self) -> None:
        """
        Check that required settings are present.

        Raises:
            ConfigError: If the SonarQube URL or token is missing.
        """
        if not self.sonarqube_url:
            raise ConfigError(
                "sonarqube-url is required (set via flag or SONARQUBE_URL env var)"
            )
        if not self.sonarqube_token:
            raise ConfigError(
                "sonarqube-token is required (set via flag or SONARQUBE_TOKEN env var)"
            )

    @classmethod
    def from_args(cls, argv: Optional[Sequence[str]] = None) -> "ExporterConfig":
        """
        Build a config from environment defaults overridden by CLI flags.

        Args:
            argv: Command line arguments (without program name). Default: none.

        Returns:
            ExporterConfig instance (not validated).
        """
        config = cls()

        parser = argparse.ArgumentParser(
            prog="sonarqube_exporter",
            description="SonarQube Prometheus Exporter",
        )
        parser.add_argument("--host", default=config.host,
                            help="Host to bind the exporter server")
        parser.add_argument("--port", type=int, default=config.port,
                            help="Port to bind the exporter server")
        parser.add_argument("--sonarqube-url", default=config.sonarqube_url,
                            help="SonarQube server URL")
        parser.add_argument("--sonarqube-token", default=config.sonarqube_token,
                            help="SonarQube authentication token")
        parser.add_argument("--log-level", default=config.log_level,
                            help="Log level (DEBUG, INFO, WARNING, ERROR)")

        args = parser.parse_args(list(argv) if argv is not None else [])

        config.host = args.host
        config.port = args.port
        config.sonarqube_url = args.sonarqube_url
        config.sonarqube_token = args.sonarqube_token
        config.log_level = args.log_level.upper()
        return config


# Singleton config instance
_config: Optional[ExporterConfig] = None


def get_config(argv: Optional[List[str]] = None) -> ExporterConfig:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = ExporterConfig.from_args(argv)
    return _config


def reset_config():
    """Reset the global config (useful for testing)."""
    global _config
    _config = None
