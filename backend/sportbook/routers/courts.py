# backend/sportbook/routers/courts.py
# PATCH = ALLOWED, DELETE = soft-delete (is_active)

import json
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..redis_client import get_redis
from ..models.generated import Courts as DBCourts, Venues as DBVenues
from ..schemas.courts import (
    CourtCreate,
    CourtUpdate,
    CourtRead,
    CourtPricingResponse,
)
from ..schemas.slots import CourtSlotsResponse
from ..services.slots import DateOutOfRange, MalformedTimeInput, invalidate_court_cache
from ..services.slots.availability import calculate_court_availability, load_schedule
from ..services.slots.config import day_type_for

router = APIRouter(prefix="/courts", tags=["courts"])

SCHEDULE_FIELDS = ("default_availability", "pricing")


@router.get("/", response_model=list[CourtRead])
def list_courts(
    venue_id: Optional[int] = None,
    sport_type: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = db.query(DBCourts).filter(DBCourts.is_active == 1)
    if venue_id is not None:
        query = query.filter(DBCourts.venue_id == venue_id)
    if sport_type:
        query = query.filter(DBCourts.sport_type == sport_type)
    return query.all()


@router.get("/{id}", response_model=CourtRead)
def get_court(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBCourts, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.post("/", response_model=CourtRead, status_code=status.HTTP_201_CREATED)
def create_court(
    data: CourtCreate,
    db: Session = Depends(get_db),
):
    venue = db.get(DBVenues, data.venue_id)
    if not venue or not venue.is_active:
        raise HTTPException(status_code=404, detail="Venue not found")

    values = data.model_dump(exclude=set(SCHEDULE_FIELDS))
    obj = DBCourts(
        **values,
        default_availability=_dump(data.default_availability),
        pricing=_dump(data.pricing),
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=CourtRead)
def update_court(
    id: int,
    data: CourtUpdate,
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    obj = db.get(DBCourts, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    changes = data.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if field in SCHEDULE_FIELDS:
            value = _dump(getattr(data, field) or [])
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)

    # Computed slots depend on availability and pricing
    if any(field in changes for field in SCHEDULE_FIELDS) or changes.get("is_active") is False:
        invalidate_court_cache(redis, id)

    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_court(
    id: int,
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    obj = db.get(DBCourts, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    obj.is_active = 0
    db.commit()

    invalidate_court_cache(redis, id)


@router.get("/{id}/slots", response_model=CourtSlotsResponse)
def get_court_slots(
    id: int,
    target_date: date = Query(..., alias="date"),
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    """Priced one-hour slots for a day, booked ones marked unavailable."""
    try:
        result = calculate_court_availability(
            db=db,
            court_id=id,
            target_date=target_date,
            filter_start=start_time,
            filter_end=end_time,
            redis=redis,
        )
    except (MalformedTimeInput, DateOutOfRange) as e:
        raise HTTPException(status_code=400, detail=str(e))

    if result is None:
        raise HTTPException(status_code=404, detail="Court not found")

    return CourtSlotsResponse(**result)


@router.get("/{id}/pricing", response_model=CourtPricingResponse)
def get_court_pricing(
    id: int,
    target_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
):
    """Active pricing rules for the day type of a date."""
    obj = db.get(DBCourts, id)
    if not obj or not obj.is_active:
        raise HTTPException(status_code=404, detail="Court not found")

    day_type = day_type_for(target_date)
    schedule = load_schedule(obj)

    return CourtPricingResponse(
        court_id=obj.id,
        date=target_date.isoformat(),
        day_type=day_type,
        pricing=[
            rule for rule in schedule.pricing
            if rule.is_active and rule.day_type == day_type
        ],
    )


def _dump(items) -> str:
    return json.dumps([item.model_dump() for item in items])
