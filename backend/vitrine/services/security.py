"""
Vitrine Backend: Credential and Token Services
================================================

What:  Password hashing (bcrypt) and bearer-token issue/verify (PyJWT).
How:   Two small abstract interfaces with one concrete implementation each,
       so the auth flow depends on the contract and tests can swap either
       side without touching routes.
Who:   AuthService (login/register/seed), the authorization gate, the seed CLI.
When:  Hashing on user creation, verification on login, token checks on every
       protected request.

Contracts:
    PasswordHasher.hash(plain)            -> opaque hash string
    PasswordHasher.verify(plain, hashed)  -> bool, constant-time compare
    TokenService.issue(user_id)           -> signed token, expires after
                                             settings.token_expiry_seconds
    TokenService.verify(token)            -> user id string, or raises
                                             AuthenticationError

bcrypt is CPU-bound (tens of milliseconds per call at the default cost), so
both bcrypt calls run in Starlette's threadpool and never block the loop.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from starlette.concurrency import run_in_threadpool

from vitrine.config import settings
from vitrine.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; newer releases raise instead of
# truncating, so truncate explicitly on both hash and verify.
BCRYPT_MAX_BYTES = 72


class PasswordHasher(ABC):
    """One-way password hash with verification."""

    @abstractmethod
    async def hash(self, password: str) -> str:
        ...

    @abstractmethod
    async def verify(self, password: str, hashed: str) -> bool:
        ...


class TokenService(ABC):
    """Issues and verifies signed tokens that carry a user id."""

    @abstractmethod
    def issue(self, user_id: str) -> str:
        ...

    @abstractmethod
    def verify(self, token: str) -> str:
        ...


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: Optional[int] = None):
        self.rounds = rounds or settings.bcrypt_rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def _hash_sync(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("ascii")

    def _verify_sync(self, password: str, hashed: str) -> bool:
        return bcrypt.checkpw(self._encode(password), hashed.encode("ascii"))

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self._hash_sync, password)

    async def verify(self, password: str, hashed: str) -> bool:
        return await run_in_threadpool(self._verify_sync, password, hashed)


class JWTTokenService(TokenService):
    """
    HS256 JWTs with payload {"id": <user id>, "iat": ..., "exp": ...}.

    The secret and lifetime default to settings; both can be overridden
    (the tests issue already-expired tokens this way).
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expires_in: Optional[int] = None,
    ):
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expires_in = expires_in if expires_in is not None else settings.token_expiry_seconds

    def issue(self, user_id: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "id": str(user_id),
            "iat": now,
            "exp": now + timedelta(seconds=self.expires_in),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """
        Decode and validate `token`.

        Raises:
            AuthenticationError: bad signature, expired, malformed, or
                missing the `id` claim. Anything else (a misconfigured
                algorithm, a library bug) propagates unchanged so it is
                reported as a server error rather than as a bad token.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "id"]},
            )
        except jwt.ExpiredSignatureError as e:
            logger.info("Rejected expired token")
            raise AuthenticationError(
                message="Token has expired",
                context={"reason": str(e)},
            )
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid token: %s", type(e).__name__)
            raise AuthenticationError(
                message="Failed to authenticate token",
                context={"reason": str(e)},
            )
        return str(payload["id"])


# ── Singleton Instances ───────────────────────────────────────────────────
password_hasher = BcryptPasswordHasher()
token_service = JWTTokenService()
