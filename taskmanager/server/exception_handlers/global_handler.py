"""
Handler of last resort for the API.

Anything that is not a ``TaskManagerError``, a validation error or an HTTP
error ends up here. The client gets a generic 500 with a short error id; the
log line with the same id carries the request context and the traceback.
"""

import traceback
import uuid

from fastapi import Request, status
from fastapi.responses import JSONResponse

from taskmanager.core.logging_config import get_logger
from taskmanager.core.monitoring import log_error

logger = get_logger(__name__)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Log an unhandled exception and answer 500.

    The response never includes the exception message, only its type and the
    ``error_id`` a user can quote when reporting the problem.
    """
    error_id = uuid.uuid4().hex[:12]
    error_type = type(exc).__name__
    path = request.url.path

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {path}: {exc}",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": error_type,
            "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        },
    )
    log_error(error_type, str(exc), {"error_id": error_id, "path": path})

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "error_id": error_id, "error_type": error_type},
    )
