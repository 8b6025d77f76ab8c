# backend/sportbook/schemas/venues.py

from typing import Optional
from pydantic import BaseModel


class VenueCreate(BaseModel):
    name: str
    city: str
    owner_id: Optional[int] = None
    district: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class VenueUpdate(BaseModel):
    is_active: Optional[bool] = None
    name: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class VenueRead(BaseModel):
    id: int
    name: str
    city: str
    owner_id: Optional[int] = None
    district: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    description: Optional[str] = None

    is_active: bool
    moderation_status: str
    verification_notes: Optional[str] = None
    verified_at: Optional[str] = None

    created_at: Optional[str] = None

    model_config = {"from_attributes": True}
