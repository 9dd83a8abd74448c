"""Error types specific to the weather lookup layer.

Purpose:
- Provide typed exceptions thrown by ``WeatherClient``.
- Expose HTTP-oriented context (status code, upstream body) for diagnosis.

Usage:
- Catch ``WeatherServiceError`` for general failures and inspect ``status_code``
  or ``details``.
- Catch ``LocationNotFoundError`` when the address cannot be resolved.
- Catch ``WeatherServiceUnavailableError`` when a provider cannot be reached.
"""

from __future__ import annotations

from typing import Any, Optional


class WeatherServiceError(Exception):
    """Base error for weather lookup failures.

    Args:
        message: Human-readable error description.
        status_code: Optional HTTP status code returned by the provider.
        details: Optional payload from the provider (e.g., JSON body).
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class LocationNotFoundError(WeatherServiceError):
    """Raised when the geocoder or forecast provider does not know the location."""


class WeatherServiceUnavailableError(WeatherServiceError):
    """Raised when a provider cannot be reached."""
