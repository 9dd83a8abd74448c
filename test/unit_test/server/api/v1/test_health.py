"""
Unit tests for the health and version endpoints.
"""

import pytest
from httpx import AsyncClient

from taskmanager.server.core import constant

pytestmark = pytest.mark.asyncio


async def test_health_check(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_version(client: AsyncClient):
    response = await client.get("/version")

    assert response.status_code == 200
    assert response.json() == {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}


async def test_responses_carry_process_time_header(client: AsyncClient):
    response = await client.get("/health")

    assert float(response.headers["X-Process-Time"]) >= 0
