"""Domain error types for the task manager.

Purpose:
- Give services and dependencies a small, typed set of failures to raise
  instead of building HTTP responses themselves.
- Carry the HTTP status code each failure maps to, so the server's exception
  handler can translate them in one place.

Usage:
- Raise ``InvalidOperationError`` for rejected input or updates (400).
- Raise ``AuthenticationError`` for missing, invalid or revoked credentials (401).
- Raise ``NotFoundError`` when a resource does not exist for the caller (404).
- Raise ``UploadRejectedError`` when an uploaded file fails validation (400).
"""

from __future__ import annotations

from typing import Any, Optional


class TaskManagerError(Exception):
    """Base error for task manager failures.

    Args:
        message: Human-readable error description.
        details: Optional structured context for diagnosis.
    """

    status_code: int = 500

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidOperationError(TaskManagerError):
    status_code = 400


class AuthenticationError(TaskManagerError):
    status_code = 401


class NotFoundError(TaskManagerError):
    status_code = 404


class UploadRejectedError(InvalidOperationError):
    """Raised when an uploaded file has the wrong type or is too large."""
