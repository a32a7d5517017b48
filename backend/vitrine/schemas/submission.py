"""Contact-form submission schemas."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SubmissionCreate(BaseModel):
    """
    Body of POST /api/contact.

    Every field is optional free text; the form is accepted as the visitor
    filled it in.
    """
    name: Optional[str] = None
    phone: Optional[str] = None
    service: Optional[str] = None
    message: Optional[str] = None

    # Phone numbers often arrive as JSON numbers
    model_config = {"coerce_numbers_to_str": True}


class SubmissionResponse(BaseModel):
    id: uuid.UUID
    name: Optional[str] = None
    phone: Optional[str] = None
    service: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime
    status: str

    model_config = {"from_attributes": True}
