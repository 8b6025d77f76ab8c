# backend/sportbook/schemas/courts.py

import json
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..services.slots.config import time_str_to_minutes


# ──────────────────────────────────────────────────────────────────────────────
# Schedule value types (stored as JSON on the court row)
# ──────────────────────────────────────────────────────────────────────────────

class TimeRange(BaseModel):
    """Half-open "HH:MM" interval [start, end)."""
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def check_time(cls, value: str) -> str:
        time_str_to_minutes(value)
        return value


class WeeklyAvailabilityEntry(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    time_slots: list[TimeRange] = []


class PricingRule(BaseModel):
    day_type: Literal["weekday", "weekend"]
    time_slot: TimeRange
    price_per_hour: float = Field(..., ge=0)
    is_active: bool = True


class CourtSchedule(BaseModel):
    """Input of the slot calculator."""
    default_availability: list[WeeklyAvailabilityEntry] = []
    pricing: list[PricingRule] = []


# ──────────────────────────────────────────────────────────────────────────────
# CRUD
# ──────────────────────────────────────────────────────────────────────────────

class CourtCreate(BaseModel):
    venue_id: int
    name: str
    sport_type: str
    capacity: int = Field(2, gt=0)
    court_type: Optional[str] = None
    surface: Optional[str] = None

    default_availability: list[WeeklyAvailabilityEntry] = []
    pricing: list[PricingRule] = []

    model_config = {"from_attributes": True}


class CourtUpdate(BaseModel):
    is_active: Optional[bool] = None
    name: Optional[str] = None
    sport_type: Optional[str] = None
    capacity: Optional[int] = Field(None, gt=0)
    court_type: Optional[str] = None
    surface: Optional[str] = None

    default_availability: Optional[list[WeeklyAvailabilityEntry]] = None
    pricing: Optional[list[PricingRule]] = None

    model_config = {"from_attributes": True}


class CourtRead(BaseModel):
    id: int
    venue_id: int
    name: str
    sport_type: str
    capacity: int
    court_type: Optional[str] = None
    surface: Optional[str] = None
    is_active: bool

    default_availability: list[WeeklyAvailabilityEntry]
    pricing: list[PricingRule]

    created_at: Optional[str] = None

    model_config = {"from_attributes": True}

    @field_validator("default_availability", "pricing", mode="before")
    @classmethod
    def parse_json(cls, value):
        if isinstance(value, str):
            return json.loads(value or "[]")
        return value


class CourtPricingResponse(BaseModel):
    """Active rules for the day type of the requested date."""
    court_id: int
    date: str
    day_type: Literal["weekday", "weekend"]
    pricing: list[PricingRule]
