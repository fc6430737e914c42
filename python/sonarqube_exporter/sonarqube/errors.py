"""Exceptions raised by the SonarQube API client."""

from typing import Optional


class SonarQubeError(Exception):
    """Base exception for SonarQube client errors."""
    pass


class UpstreamError(SonarQubeError):
    """SonarQube returned a non-success status or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(SonarQubeError):
    """Response body cannot be parsed into the expected schema."""
    pass
