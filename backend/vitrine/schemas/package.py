"""Pricing package schemas."""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class PackageResponse(BaseModel):
    id: uuid.UUID
    name: str
    price: str = Field(description="Display string, e.g. '25,000' or 'Contact us'")
    features: List[str] = Field(default_factory=list)
    description: Optional[str] = None
    cta_link: Optional[str] = None

    model_config = {"from_attributes": True}


class PackageUpdate(BaseModel):
    """
    Body of PUT /api/packages/{id}.

    Partial: only the fields present in the request are written. Use
    `model_dump(exclude_unset=True)` to get them.
    """
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    price: Optional[str] = Field(default=None, min_length=1, max_length=100)
    features: Optional[List[str]] = None
    description: Optional[str] = None
    cta_link: Optional[str] = Field(default=None, max_length=1024)

    model_config = {"extra": "ignore"}

    @field_validator("name", "price", "features")
    @classmethod
    def reject_null(cls, v):
        """Required columns may be changed but not cleared."""
        if v is None:
            raise ValueError("must not be null")
        return v
