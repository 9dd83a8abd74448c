"""
Unit tests for server exception handlers.

Tests cover domain error mapping, request validation mapping and the global
handler for unexpected errors.
"""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from taskmanager.core.errors import (
    AuthenticationError,
    InvalidOperationError,
    NotFoundError,
    TaskManagerError,
    UploadRejectedError,
)
from taskmanager.server.exception_handlers import setup_exception_handlers
from taskmanager.server.exception_handlers.domain_handler import domain_exception_handler
from taskmanager.server.exception_handlers.global_handler import global_exception_handler


@pytest.fixture
def mock_request():
    """Create a mock request object."""
    request = Mock(spec=Request)
    request.method = "GET"
    request.url.path = "/api/v1/test"
    request.query_params = {}
    request.client = Mock()
    request.client.host = "127.0.0.1"
    return request


class TestGlobalExceptionHandler:
    """Test suite for global exception handler."""

    @pytest.mark.asyncio
    async def test_exception_handler_logs_error(self, mock_request):
        exc = ValueError("Test error")

        with patch("taskmanager.server.exception_handlers.global_handler.logger") as mock_logger:
            await global_exception_handler(mock_request, exc)

            mock_logger.error.assert_called_once()
            call_args = mock_logger.error.call_args
            assert "Unhandled exception" in call_args[0][0]
            assert call_args[1]["extra"]["error_type"] == "ValueError"

    @pytest.mark.asyncio
    async def test_exception_handler_returns_500_with_error_id(self, mock_request):
        exc = RuntimeError("Test error")

        with patch("taskmanager.server.exception_handlers.global_handler.logger"):
            response = await global_exception_handler(mock_request, exc)

        assert isinstance(response, JSONResponse)
        assert response.status_code == 500
        body = json.loads(response.body.decode())
        assert body["detail"] == "Internal server error"
        assert body["error_type"] == "RuntimeError"
        assert isinstance(body["error_id"], str)
        assert len(body["error_id"]) == 12


class TestDomainExceptionHandler:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc,status_code",
        [
            (InvalidOperationError("bad"), 400),
            (UploadRejectedError("bad file"), 400),
            (AuthenticationError("Please authenticate."), 401),
            (NotFoundError("missing"), 404),
            (TaskManagerError("broken"), 500),
        ],
    )
    async def test_maps_status_code(self, mock_request, exc, status_code):
        response = await domain_exception_handler(mock_request, exc)

        assert response.status_code == status_code
        assert json.loads(response.body.decode()) == {"detail": exc.message}


class _Payload(BaseModel):
    count: int


def _build_app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/api/v1/boom")
    async def boom():
        raise RuntimeError("kaboom")

    @app.get("/api/v1/missing")
    async def missing():
        raise NotFoundError("Thing not found")

    @app.post("/api/v1/payload")
    async def payload(body: _Payload):
        return body

    return app


class TestRegisteredHandlers:
    @pytest.mark.asyncio
    async def test_validation_errors_are_400(self):
        async with AsyncClient(transport=ASGITransport(app=_build_app()), base_url="http://localhost") as client:
            response = await client.post("/api/v1/payload", json={"count": "many"})

        assert response.status_code == 400
        assert response.json()["detail"][0]["loc"] == ["body", "count"]

    @pytest.mark.asyncio
    async def test_domain_errors_are_mapped(self):
        async with AsyncClient(transport=ASGITransport(app=_build_app()), base_url="http://localhost") as client:
            response = await client.get("/api/v1/missing")

        assert response.status_code == 404
        assert response.json() == {"detail": "Thing not found"}

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_500(self):
        transport = ASGITransport(app=_build_app(), raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://localhost") as client:
            response = await client.get("/api/v1/boom")

        assert response.status_code == 500
        assert response.json()["error_type"] == "RuntimeError"
