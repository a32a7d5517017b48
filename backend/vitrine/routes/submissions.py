"""
Vitrine Backend: Submission Route Handlers
============================================

What:  POST /api/contact (public) plus the admin views over submissions.
How:   Thin handlers: validate the body via SubmissionCreate, delegate to
       SubmissionService, return the JSON contract.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vitrine.auth import require_admin
from vitrine.database import get_db_session
from vitrine.schemas.common import ErrorResponse, MessageResponse
from vitrine.schemas.submission import SubmissionCreate, SubmissionResponse
from vitrine.services.submission_service import submission_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Submissions"])


@router.post(
    "/contact",
    status_code=201,
    response_model=MessageResponse,
    responses={500: {"description": "Submission could not be saved", "model": ErrorResponse}},
    summary="Submit the contact form",
)
async def create_submission(
    body: SubmissionCreate,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await submission_service.create_submission(db, body)
    return MessageResponse(message="Submission saved successfully")


@router.get(
    "/admin/submissions",
    response_model=List[SubmissionResponse],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="List contact submissions, newest first",
)
async def list_submissions(
    _user_id: str = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> List[SubmissionResponse]:
    return await submission_service.list_submissions(db)


@router.delete(
    "/admin/submissions/{submission_id}",
    response_model=MessageResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Delete a submission",
    description="Answers 200 whether or not the submission existed.",
)
async def delete_submission(
    submission_id: UUID,
    _user_id: str = Depends(require_admin),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await submission_service.delete_submission(db, submission_id)
    return MessageResponse(message="Submission deleted")
