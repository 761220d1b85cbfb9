"""
Pydantic schemas for candidate endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import EmailStr, Field

from assessdesk.schemas.common import CamelModel


class CandidateCreate(CamelModel):
    """Schema for registering a candidate."""
    name: str = Field(..., min_length=1, max_length=200, description="Candidate's full name")
    email: EmailStr = Field(..., description="Candidate's email address")
    position: str = Field(..., min_length=1, max_length=200, description="Position applied for")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Sarah Johnson",
                "email": "sarah.johnson@email.com",
                "position": "Frontend Developer"
            }
        }


class CandidateUpdate(CamelModel):
    """Schema for partially updating a candidate."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    position: Optional[str] = Field(None, min_length=1, max_length=200)


class CandidateResponse(CamelModel):
    """Schema for candidate response."""
    id: int
    name: str
    email: str
    position: str
    created_at: datetime

    class Config:
        from_attributes = True
