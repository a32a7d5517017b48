"""
Vitrine Backend: Auth Route Handlers
======================================

Route Inventory:
    POST /api/auth/login      public       → {auth: true, token}
    POST /api/auth/register   admin token  → 201 {message}
    POST /api/auth/seed       public, once → 201 {message}
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vitrine.auth import require_admin
from vitrine.database import get_db_session
from vitrine.schemas.auth import Credentials, LoginResponse
from vitrine.schemas.common import ErrorResponse, MessageResponse
from vitrine.services.auth_service import ADMIN_PASSWORD, ADMIN_USERNAME, auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"description": "Wrong password", "model": ErrorResponse},
        404: {"description": "Unknown username", "model": ErrorResponse},
    },
    summary="Exchange credentials for a bearer token",
    description="The token is valid for 24 hours. Send it as `Authorization: Bearer <token>`.",
)
async def login(
    body: Credentials,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    token = await auth_service.login(db, body.username, body.password)
    return LoginResponse(auth=True, token=token)


@router.post(
    "/register",
    status_code=201,
    response_model=MessageResponse,
    responses={
        400: {"description": "Username already taken", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
    },
    summary="Create another admin user",
)
async def register(
    body: Credentials,
    _user_id: str = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await auth_service.register(db, body.username, body.password)
    return MessageResponse(message="Admin user created successfully")


@router.post(
    "/seed",
    status_code=201,
    response_model=MessageResponse,
    responses={400: {"description": "Admin already exists", "model": ErrorResponse}},
    summary="Create the bootstrap admin account (first run only)",
)
async def seed_admin(db: AsyncSession = Depends(get_db_session)) -> MessageResponse:
    await auth_service.seed_admin(db)
    return MessageResponse(
        message=f"Admin user created. Username: {ADMIN_USERNAME}, Password: {ADMIN_PASSWORD}"
    )
