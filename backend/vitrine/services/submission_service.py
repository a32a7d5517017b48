"""
Vitrine Backend: Submission Service
=====================================

What:  Contact-form leads: create (public), list and delete (admin).
How:   Repository calls on the request's session; SQLAlchemy failures are
       wrapped in DatabaseError so the client only sees an opaque 500.
"""

import logging
import uuid
from typing import List

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vitrine.exceptions import DatabaseError
from vitrine.models import Submission
from vitrine.repository import Repository
from vitrine.schemas.submission import SubmissionCreate, SubmissionResponse

logger = logging.getLogger(__name__)


class SubmissionService:
    def __init__(self):
        self.repo = Repository(Submission)

    async def create_submission(self, db: AsyncSession, data: SubmissionCreate) -> SubmissionResponse:
        try:
            submission = await self.repo.insert(db, **data.model_dump())
        except SQLAlchemyError as e:
            logger.error("Error saving submission: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error saving submission",
                context={"error_type": type(e).__name__},
            )
        logger.info("Submission %s saved (service=%s)", submission.id, submission.service)
        return SubmissionResponse.model_validate(submission)

    async def list_submissions(self, db: AsyncSession) -> List[SubmissionResponse]:
        """All submissions, newest first."""
        try:
            submissions = await self.repo.find_all(db, desc(Submission.created_at))
        except SQLAlchemyError as e:
            logger.error("Error fetching submissions: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Error fetching submissions",
                context={"error_type": type(e).__name__},
            )
        return [SubmissionResponse.model_validate(s) for s in submissions]

    async def delete_submission(self, db: AsyncSession, submission_id: uuid.UUID) -> bool:
        """
        Delete by id. Returns whether a row was removed; the route answers 200
        either way (no existence check on delete).
        """
        try:
            deleted = await self.repo.delete_by_id(db, submission_id)
        except SQLAlchemyError as e:
            logger.error("Error deleting submission %s: %s", submission_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Error deleting submission",
                context={"submission_id": str(submission_id)},
            )
        if deleted is None:
            logger.info("Delete of unknown submission %s ignored", submission_id)
            return False
        logger.info("Submission %s deleted", submission_id)
        return True


submission_service = SubmissionService()
