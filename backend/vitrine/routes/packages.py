"""
Vitrine Backend: Package Route Handlers
=========================================

Route Inventory:
    GET  /api/packages        public
    POST /api/packages/seed   public, refused once any package exists
    PUT  /api/packages/{id}   admin, partial update
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vitrine.auth import require_admin
from vitrine.database import get_db_session
from vitrine.schemas.common import ErrorResponse, MessageResponse
from vitrine.schemas.package import PackageResponse, PackageUpdate
from vitrine.services.package_service import package_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/packages", tags=["Packages"])


@router.get("", response_model=List[PackageResponse], summary="List pricing packages")
async def list_packages(db: AsyncSession = Depends(get_db_session)) -> List[PackageResponse]:
    return await package_service.list_packages(db)


@router.post(
    "/seed",
    status_code=201,
    response_model=MessageResponse,
    responses={400: {"description": "Packages already seeded", "model": ErrorResponse}},
    summary="Create the default three-tier catalog (first run only)",
)
async def seed_packages(db: AsyncSession = Depends(get_db_session)) -> MessageResponse:
    await package_service.seed_packages(db)
    return MessageResponse(message="Packages seeded")


@router.put(
    "/{package_id}",
    response_model=PackageResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
        404: {"description": "Unknown package", "model": ErrorResponse},
    },
    summary="Update some fields of a package",
    description="Fields left out of the body keep their current value.",
)
async def update_package(
    package_id: UUID,
    body: PackageUpdate,
    _user_id: str = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> PackageResponse:
    return await package_service.update_package(db, package_id, body)
