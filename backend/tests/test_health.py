"""
Vitrine Backend: Health Endpoint Tests
========================================
"""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from vitrine import __version__


@pytest.mark.asyncio
async def test_health_reports_database(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert body["version"] == __version__
    assert body["uptime_seconds"] >= 0


@pytest.mark.asyncio
async def test_health_unhealthy_when_database_down(test_client):
    with patch("vitrine.routes.health.engine") as mock_engine:
        mock_engine.connect.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
        response = await test_client.get("/health")

    assert response.status_code == 503
    assert response.json()["status"] == "unhealthy"
