"""
Exception handlers for the task manager server.

This package contains custom exception handlers for different error types
and a setup function to register them with the FastAPI application.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager.core.errors import TaskManagerError
from taskmanager.core.logging_config import get_logger

from .domain_handler import domain_exception_handler, not_found_page_handler, validation_exception_handler
from .global_handler import global_exception_handler

logger = get_logger(__name__)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    This function should be called during application initialization to set up
    all custom exception handlers.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(TaskManagerError, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_page_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")


__all__ = [
    "domain_exception_handler",
    "global_exception_handler",
    "not_found_page_handler",
    "setup_exception_handlers",
    "validation_exception_handler",
]
