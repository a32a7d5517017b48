"""Portfolio project schemas. Creation is multipart, so there is no JSON request model."""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProjectResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    image_url: str = Field(description="Public URL of the uploaded image, e.g. /uploads/<file>")
    created_at: datetime

    model_config = {"from_attributes": True}


class ProjectCreatedResponse(BaseModel):
    message: str = "Project added successfully"
    project: ProjectResponse
