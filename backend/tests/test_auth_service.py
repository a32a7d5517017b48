"""
Vitrine Backend: Auth Service Unit Tests
==========================================

Uses a mocked session plus fake hasher and token service, so no database
or bcrypt work is involved.
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from vitrine.exceptions import AlreadyExistsError, InvalidCredentialsError, NotFoundError
from vitrine.models import User
from vitrine.services.auth_service import AuthService


@pytest.fixture
def hasher():
    fake = MagicMock()
    fake.hash = AsyncMock(side_effect=lambda password: f"hashed:{password}")
    fake.verify = AsyncMock(side_effect=lambda password, hashed: hashed == f"hashed:{password}")
    return fake


@pytest.fixture
def tokens():
    fake = MagicMock()
    fake.issue.return_value = "signed-token"
    return fake


def stored_user(username="admin", password="admin123"):
    return User(id=uuid.uuid4(), username=username, password_hash=f"hashed:{password}")


def returns_user(mock_db_session, user):
    mock_db_session.execute.return_value.scalar_one_or_none = MagicMock(return_value=user)


class TestLogin:
    @pytest.mark.asyncio
    async def test_valid_credentials_issue_token(self, mock_db_session, hasher, tokens):
        user = stored_user()
        returns_user(mock_db_session, user)

        token = await AuthService(hasher, tokens).login(mock_db_session, "admin", "admin123")

        assert token == "signed-token"
        tokens.issue.assert_called_once_with(str(user.id))

    @pytest.mark.asyncio
    async def test_unknown_user(self, mock_db_session, hasher, tokens):
        returns_user(mock_db_session, None)

        with pytest.raises(NotFoundError, match="User not found"):
            await AuthService(hasher, tokens).login(mock_db_session, "ghost", "x")
        tokens.issue.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_password(self, mock_db_session, hasher, tokens):
        returns_user(mock_db_session, stored_user())

        with pytest.raises(InvalidCredentialsError, match="Invalid password"):
            await AuthService(hasher, tokens).login(mock_db_session, "admin", "nope")


class TestCreateUsers:
    @pytest.mark.asyncio
    async def test_seed_admin_stores_hash(self, mock_db_session, hasher, tokens):
        returns_user(mock_db_session, None)

        user = await AuthService(hasher, tokens).seed_admin(mock_db_session)

        assert user.username == "admin"
        assert user.password_hash == "hashed:admin123"

    @pytest.mark.asyncio
    async def test_seed_admin_twice(self, mock_db_session, hasher, tokens):
        returns_user(mock_db_session, stored_user())

        with pytest.raises(AlreadyExistsError, match="Admin already exists"):
            await AuthService(hasher, tokens).seed_admin(mock_db_session)
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_race_maps_to_already_exists(self, mock_db_session, hasher, tokens):
        returns_user(mock_db_session, None)
        mock_db_session.flush.side_effect = IntegrityError("INSERT", {}, Exception("unique"))

        with pytest.raises(AlreadyExistsError, match="User already exists"):
            await AuthService(hasher, tokens).register(mock_db_session, "editor", "pw")
        mock_db_session.rollback.assert_awaited_once()
