"""
Vitrine Backend: Project Route Handlers
=========================================

Route Inventory:
    GET    /api/projects        public
    POST   /api/projects        admin, multipart/form-data (image, title, description)
    DELETE /api/projects/{id}   admin

The upload is read into memory before it is handed to ProjectService;
its size is bounded by settings.max_file_size.
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from vitrine.auth import require_admin
from vitrine.database import get_db_session
from vitrine.schemas.common import ErrorResponse, MessageResponse
from vitrine.schemas.project import ProjectCreatedResponse, ProjectResponse
from vitrine.services.project_service import project_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Projects"])


@router.get(
    "/projects",
    response_model=List[ProjectResponse],
    summary="List portfolio projects, newest first",
)
async def list_projects(db: AsyncSession = Depends(get_db_session)) -> List[ProjectResponse]:
    return await project_service.list_projects(db)


@router.post(
    "/projects",
    status_code=201,
    response_model=ProjectCreatedResponse,
    responses={
        400: {"description": "Image missing, invalid type or size", "model": ErrorResponse},
        401: {"description": "Missing or invalid token", "model": ErrorResponse},
    },
    summary="Add a portfolio project with its image",
)
async def create_project(
    _user_id: str = Depends(require_admin),
    title: Optional[str] = Form(default=None),
    description: Optional[str] = Form(default=None),
    image: Optional[UploadFile] = File(default=None, description="Project image (png, jpg, gif, webp, svg)"),
    db: AsyncSession = Depends(get_db_session),
) -> ProjectCreatedResponse:
    filename: Optional[str] = None
    content: Optional[bytes] = None
    try:
        if image is not None and image.filename:
            filename = image.filename
            content = await image.read()
            logger.info(
                "Received project upload: filename=%s, size=%d bytes",
                filename,
                len(content),
            )
        return await project_service.create_project(
            db,
            title=title,
            description=description,
            filename=filename,
            content=content,
            content_length=image.size if image is not None else None,
        )
    finally:
        if image is not None:
            await image.close()


@router.delete(
    "/projects/{project_id}",
    response_model=MessageResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Delete a portfolio project",
    description="Answers 200 whether or not the project existed.",
)
async def delete_project(
    project_id: UUID,
    _user_id: str = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await project_service.delete_project(db, project_id)
    return MessageResponse(message="Project deleted")
