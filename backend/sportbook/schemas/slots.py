"""
Pydantic schemas for court slots API.
"""

from typing import Literal
from pydantic import BaseModel


class SlotRead(BaseModel):
    """A priced one-hour slot."""
    start: str  # "HH:MM"
    end: str    # "HH:MM"
    price: float
    label: str
    is_available: bool = True

    model_config = {"from_attributes": True}


class CourtSlotsResponse(BaseModel):
    """Slots of a court for a day, with booked ones marked."""
    court_id: int
    venue_id: int
    date: str
    day_type: Literal["weekday", "weekend"]
    slots: list[SlotRead]

    model_config = {"from_attributes": True}
