"""
Vitrine Backend: Project Service
==================================

What:  Portfolio projects: list (public), create with image and delete (admin).

Create flow:
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐
    │  Upload  │───▶│  FileService │───▶│  Insert row  │
    │  (Route) │    │  validate +  │    │  image_url = │
    └──────────┘    │  store       │    │  /uploads/.. │
                    └──────────────┘    └──────────────┘

    On a failed insert the stored file is removed again, so a missing
    Project row never leaves an orphaned upload behind.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vitrine.exceptions import DatabaseError, ValidationError
from vitrine.models import Project
from vitrine.repository import Repository
from vitrine.schemas.project import ProjectCreatedResponse, ProjectResponse
from vitrine.services.file_service import file_service

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self):
        self.repo = Repository(Project)

    async def list_projects(self, db: AsyncSession) -> List[ProjectResponse]:
        """All projects, newest first."""
        try:
            projects = await self.repo.find_all(db, desc(Project.created_at))
        except SQLAlchemyError as e:
            logger.error("Error fetching projects: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching projects",
                context={"error_type": type(e).__name__},
            )
        return [ProjectResponse.model_validate(p) for p in projects]

    async def create_project(
        self,
        db: AsyncSession,
        title: Optional[str],
        description: Optional[str],
        filename: Optional[str],
        content: Optional[bytes],
        content_length: Optional[int] = None,
    ) -> ProjectCreatedResponse:
        """
        Store the image, then the Project row.

        Raises:
            ValidationError: no image attached (checked first), empty title,
                disallowed file type, empty or oversized file.
            FileStorageError: the image could not be written.
            DatabaseError: the row could not be inserted.
        """
        if not filename or content is None:
            raise ValidationError(message="Image is required", field="image")
        if not title or not title.strip():
            raise ValidationError(message="Title is required", field="title")

        absolute_path, image_url = await file_service.validate_and_store(
            filename=filename,
            content=content,
            content_length=content_length,
        )

        try:
            project = await self.repo.insert(
                db,
                title=title.strip(),
                description=description,
                image_url=image_url,
            )
        except SQLAlchemyError as e:
            await file_service.cleanup_file(absolute_path)
            logger.error("Error adding project: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error adding project",
                context={"error_type": type(e).__name__},
            )

        logger.info("Project %s created with image %s", project.id, image_url)
        return ProjectCreatedResponse(
            message="Project added successfully",
            project=ProjectResponse.model_validate(project),
        )

    async def delete_project(self, db: AsyncSession, project_id: uuid.UUID) -> bool:
        """
        Delete by id without an existence check. When a row was removed its
        uploaded image is removed as well, only after the delete is committed.
        Returns whether a row existed.
        """
        try:
            deleted = await self.repo.delete_by_id(db, project_id)
            if deleted is not None:
                # The image must outlive a row whose delete failed to commit
                await db.commit()
        except SQLAlchemyError as e:
            logger.error("Error deleting project %s: %s", project_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Error deleting project",
                context={"project_id": str(project_id)},
            )

        if deleted is None:
            logger.info("Delete of unknown project %s ignored", project_id)
            return False

        image_path = file_service.path_for_url(deleted.image_url)
        if image_path is not None:
            await file_service.cleanup_file(str(image_path))
        logger.info("Project %s deleted", project_id)
        return True


project_service = ProjectService()
