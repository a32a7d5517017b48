"""
Vitrine Backend: Auth Service
===============================

What:  Login, admin registration, and the one-shot admin bootstrap.
How:   Looks users up through the Repository, checks passwords with the
       PasswordHasher, issues tokens with the TokenService.
Who:   Called by the /api/auth routes and by the `vitrine-seed-admin` CLI.

Flows:
    login(username, password)
        unknown user      → NotFoundError            (404 "User not found")
        wrong password    → InvalidCredentialsError  (401 "Invalid password")
        otherwise         → signed token, 24h expiry

    register(username, password)      [admin only, enforced by the route]
        username taken    → AlreadyExistsError       (400 "User already exists")

    seed_admin()
        'admin' exists    → AlreadyExistsError       (400 "Admin already exists")
        otherwise         → creates admin / admin123

After the first login with the bootstrap account, register a real admin.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vitrine.exceptions import (
    AlreadyExistsError,
    DatabaseError,
    InvalidCredentialsError,
    NotFoundError,
)
from vitrine.models import User
from vitrine.repository import Repository
from vitrine.services.security import (
    PasswordHasher,
    TokenService,
    password_hasher,
    token_service,
)

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin123"


class AuthService:
    def __init__(
        self,
        hasher: Optional[PasswordHasher] = None,
        tokens: Optional[TokenService] = None,
    ):
        self.repo = Repository(User)
        self.hasher = hasher or password_hasher
        self.tokens = tokens or token_service

    async def _find_user(self, db: AsyncSession, username: str) -> Optional[User]:
        try:
            return await self.repo.find_one_by(db, username=username)
        except SQLAlchemyError as e:
            logger.error("Error looking up user %r: %s", username, str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

    async def _create_user(
        self,
        db: AsyncSession,
        username: str,
        password: str,
        exists_message: str = "User already exists",
    ) -> User:
        password_hash = await self.hasher.hash(password)
        try:
            return await self.repo.insert(db, username=username, password_hash=password_hash)
        except IntegrityError:
            # Lost a race against a concurrent create of the same username
            await db.rollback()
            raise AlreadyExistsError(
                message=exists_message,
                context={"username": username},
            )
        except SQLAlchemyError as e:
            logger.error("Error creating user %r: %s", username, str(e), exc_info=True)
            raise DatabaseError(
                message="Error creating user",
                context={"error_type": type(e).__name__},
            )

    async def login(self, db: AsyncSession, username: str, password: str) -> str:
        """Returns a bearer token for valid credentials."""
        user = await self._find_user(db, username)
        if user is None:
            logger.info("Login failed: unknown user %r", username)
            raise NotFoundError(resource="user", message="User not found")

        if not await self.hasher.verify(password, user.password_hash):
            logger.info("Login failed: wrong password for %r", username)
            raise InvalidCredentialsError()

        token = self.tokens.issue(str(user.id))
        logger.info("User %r logged in", username)
        return token

    async def register(self, db: AsyncSession, username: str, password: str) -> User:
        if await self._find_user(db, username) is not None:
            raise AlreadyExistsError(
                message="User already exists",
                context={"username": username},
            )
        user = await self._create_user(db, username, password)
        logger.info("Admin user %r registered", username)
        return user

    async def seed_admin(self, db: AsyncSession) -> User:
        if await self._find_user(db, ADMIN_USERNAME) is not None:
            raise AlreadyExistsError(message="Admin already exists")
        user = await self._create_user(
            db, ADMIN_USERNAME, ADMIN_PASSWORD, exists_message="Admin already exists"
        )
        logger.warning(
            "Bootstrap admin %r created with the default password; change it after first login",
            ADMIN_USERNAME,
        )
        return user


auth_service = AuthService()
