# backend/sportbook/schemas/bookings.py

from datetime import date
from typing import Optional
from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    user_id: int
    court_id: int

    date: date
    start_time: str = Field(..., description="HH:MM, a slot start")
    end_time: str = Field(..., description="HH:MM, a slot end")

    notes: Optional[str] = None

    model_config = {"from_attributes": True}


class BookingCancel(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)


class BookingRead(BaseModel):
    id: int

    user_id: int
    court_id: int
    venue_id: int

    date: str
    start_time: str
    end_time: str

    status: str
    total_price: float
    discount: float
    final_price: float
    points_used: int
    points_earned: int

    notes: Optional[str] = None
    cancel_reason: Optional[str] = None

    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = {"from_attributes": True}
