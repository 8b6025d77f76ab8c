# backend/sportbook/schemas/admin.py

from typing import Optional
from pydantic import BaseModel, Field


class VenueModeration(BaseModel):
    """Request body for venue approve/reject"""
    verification_notes: Optional[str] = None


class UserBan(BaseModel):
    """Request body for POST /admin/users/{id}/ban"""
    reason: str = Field(..., min_length=3, description="Reason for the ban (min 3 chars)")
