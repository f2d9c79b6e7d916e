from unittest.mock import AsyncMock, Mock

import pytest
from httpx import AsyncClient, ASGITransport

from app.api.deps import get_service_manager
from app.main import app


@pytest.mark.asyncio
async def test_unhandled_error_returns_problem_details():
    services = Mock()
    services.tournament_service.get_by_id = AsyncMock(side_effect=RuntimeError("database exploded"))
    app.dependency_overrides[get_service_manager] = lambda: services

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as ac:
            response = await ac.get("/api/tournaments/1")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    body = response.json()
    assert body["title"] == "Internal Server Error"
    assert body["status"] == 500
    assert "database exploded" not in body["detail"]
