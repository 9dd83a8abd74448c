"""
Domain and Request Error Handlers.

Translate the task manager's domain errors and FastAPI's request validation
errors into JSON responses, and render the site's 404 page for unknown
non-API paths.
"""

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskmanager.core.errors import TaskManagerError
from taskmanager.core.logging_config import get_logger
from taskmanager.server.core import constant

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: TaskManagerError) -> JSONResponse:
    """Return ``{"detail": message}`` with the status code the error maps to."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    else:
        logger.debug(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies and query parameters as 400 rather than 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


async def not_found_page_handler(request: Request, exc: StarletteHTTPException):
    """Render the site 404 page for unknown non-API paths.

    API paths, and every other HTTP error, keep FastAPI's JSON body.
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND and not request.url.path.startswith(constant.API_V1_STR):
        # Imported here so the handlers package does not load templates at import time
        from taskmanager.server.site.pages import render_not_found

        return render_not_found(request, "Page not found")
    return await http_exception_handler(request, exc)
