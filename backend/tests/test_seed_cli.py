"""
Vitrine Backend: Admin Bootstrap CLI Tests
============================================
"""

from unittest.mock import AsyncMock, patch

import pytest

from vitrine import seed
from vitrine.exceptions import DatabaseError


@pytest.fixture
def no_dispose():
    with patch.object(seed, "dispose_engine", AsyncMock()) as mock_dispose:
        yield mock_dispose


@pytest.mark.asyncio
async def test_creates_admin(db_tables, no_dispose, capsys):
    assert await seed.seed_admin() == 0
    assert "Username: admin, Password: admin123" in capsys.readouterr().out
    no_dispose.assert_awaited_once()


@pytest.mark.asyncio
async def test_existing_admin_exits_zero(db_tables, no_dispose, capsys):
    await seed.seed_admin()

    assert await seed.seed_admin() == 0
    assert "already exists" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_database_failure_exits_one(no_dispose, capsys):
    with patch.object(seed.auth_service, "seed_admin", AsyncMock(side_effect=DatabaseError())):
        assert await seed.seed_admin() == 1
    assert "Error seeding admin" in capsys.readouterr().err

