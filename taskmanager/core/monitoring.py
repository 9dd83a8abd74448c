"""
Monitoring and Tracing Configuration Module.

This module provides optional integration with Pydantic Logfire for tracing
the task manager, including:
- API endpoint tracing
- Database operation monitoring
- Outbound HTTP calls to the weather providers
- Authentication events

When Logfire is disabled (the default) every helper still writes a standard
log record, so request and auth activity stays visible in the console logs.
"""

import logging
import os
from typing import Optional

import logfire
from fastapi import FastAPI

logger = logging.getLogger(__name__)

# Logfire configuration from environment
LOGFIRE_ENABLED = os.getenv("LOGFIRE_ENABLED", "false").lower() in ("true", "1", "yes")
LOGFIRE_TOKEN = os.getenv("LOGFIRE_TOKEN", "")
LOGFIRE_ENVIRONMENT = os.getenv("LOGFIRE_ENVIRONMENT", "development")
LOGFIRE_SERVICE_NAME = os.getenv("LOGFIRE_SERVICE_NAME", "taskmanager-server")
LOGFIRE_SERVICE_VERSION = os.getenv("LOGFIRE_SERVICE_VERSION", "0.0.0")

# Feature flags
LOGFIRE_TRACE_SQLALCHEMY = os.getenv("LOGFIRE_TRACE_SQLALCHEMY", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_HTTPX = os.getenv("LOGFIRE_TRACE_HTTPX", "true").lower() in ("true", "1", "yes")
LOGFIRE_TRACE_FASTAPI = os.getenv("LOGFIRE_TRACE_FASTAPI", "true").lower() in ("true", "1", "yes")

_logfire_active = False


def is_logfire_active() -> bool:
    return _logfire_active


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    This function sets up Logfire with automatic instrumentation for:
    - SQLAlchemy database operations
    - HTTPX HTTP requests
    - FastAPI endpoints

    Args:
        app: FastAPI application instance for FastAPI instrumentation (optional).
             If provided, enables automatic tracing of FastAPI endpoints.

    The initialization is conditional based on LOGFIRE_ENABLED environment variable.
    """
    global _logfire_active

    if not LOGFIRE_ENABLED:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not LOGFIRE_TOKEN:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    try:
        logfire.configure(
            token=LOGFIRE_TOKEN,
            service_name=LOGFIRE_SERVICE_NAME,
            service_version=LOGFIRE_SERVICE_VERSION,
            environment=LOGFIRE_ENVIRONMENT,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return

    _logfire_active = True

    instrumentations = [
        ("SQLAlchemy", LOGFIRE_TRACE_SQLALCHEMY, logfire.instrument_sqlalchemy, {}),
        ("HTTPX", LOGFIRE_TRACE_HTTPX, logfire.instrument_httpx, {}),
        ("FastAPI", LOGFIRE_TRACE_FASTAPI and app is not None, logfire.instrument_fastapi, {"app": app}),
    ]
    for name, enabled, instrument, kwargs in instrumentations:
        if not enabled:
            continue
        try:
            instrument(**kwargs)
            logger.info(f"Logfire: {name} instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument {name}: {e}")

    logger.info(f"Logfire monitoring initialized: environment={LOGFIRE_ENVIRONMENT}, service={LOGFIRE_SERVICE_NAME}")


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: Response status code
        duration_ms: Request duration in milliseconds
    """
    logger.info(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")
    if _logfire_active:
        logfire.info(
            "API request",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
        )


def log_auth_event(event: str, user_id: Optional[int] = None, email: Optional[str] = None) -> None:
    """
    Log an authentication event (signup, login, logout, failed login).

    Args:
        event: Short event name
        user_id: The user the event belongs to, when known
        email: The email presented, when known
    """
    logger.info(f"Auth event: {event} user_id={user_id} email={email}")
    if _logfire_active:
        logfire.info("Auth event", auth_event=event, user_id=user_id, email=email)


def log_weather_lookup(address: str, ok: bool, duration_ms: float) -> None:
    """
    Log a weather lookup against the upstream providers.

    Args:
        address: Address that was looked up
        ok: Whether the lookup produced a forecast
        duration_ms: Total lookup duration in milliseconds
    """
    logger.info(f"Weather lookup address={address!r} ok={ok} ({duration_ms:.2f}ms)")
    if _logfire_active:
        logfire.info("Weather lookup", address=address, ok=ok, duration_ms=duration_ms)


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    logger.error(f"{error_type}: {error_message}", extra={"context": context or {}})
    if _logfire_active:
        logfire.error(f"{error_type}: {error_message}", **(context or {}))
