"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers exception handlers, includes all API routers and
mounts the site pages and static files. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from taskmanager.core.database import init_db
from taskmanager.core.logging_config import get_logger, setup_logging
from taskmanager.core.monitoring import initialize_logfire

from .api.v1 import admin, health, tasks, uploads, users
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import RequestLoggingMiddleware
from .site import pages

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Handles startup and shutdown events for the FastAPI application.
    """
    # Startup
    try:
        logger.info("Starting up Task Manager Server...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    # Shutdown
    logger.info("Shutting down Task Manager Server...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Task Manager Server API

    This API lets users sign up, log in and manage their own tasks, with
    filtering, sorting and pagination, avatar and document uploads, and admin
    routes for managing every user and task. It also serves a small weather site.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

# Set all CORS enabled origins
cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(RequestLoggingMiddleware)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(tasks.router, prefix=f"{constant.API_V1_STR}/tasks")
app.include_router(uploads.router, prefix=f"{constant.API_V1_STR}/uploads")
app.include_router(admin.router, prefix=f"{constant.API_V1_STR}/admin")

app.mount("/static", StaticFiles(directory=str(pages.STATIC_DIR)), name="static")
app.include_router(pages.router)
