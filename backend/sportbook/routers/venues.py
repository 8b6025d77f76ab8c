# backend/sportbook/routers/venues.py
# PATCH = ALLOWED, DELETE = soft-delete (is_active)
# Public listing shows approved venues only; moderation lives in admin.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..redis_client import get_redis
from ..models.generated import Courts as DBCourts, Users as DBUsers, Venues as DBVenues
from ..schemas.courts import CourtRead
from ..schemas.venues import (
    VenueCreate,
    VenueUpdate,
    VenueRead,
)
from ..services.slots import invalidate_court_cache

router = APIRouter(prefix="/venues", tags=["venues"])


@router.get("/", response_model=list[VenueRead])
def list_venues(
    city: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = db.query(DBVenues).filter(
        DBVenues.is_active == 1,
        DBVenues.moderation_status == "approved",
    )
    if city:
        query = query.filter(DBVenues.city == city)
    return query.all()


@router.get("/{id}", response_model=VenueRead)
def get_venue(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBVenues, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


@router.get("/{id}/courts", response_model=list[CourtRead])
def list_venue_courts(id: int, db: Session = Depends(get_db)):
    obj = db.get(DBVenues, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return (
        db.query(DBCourts)
        .filter(DBCourts.venue_id == id, DBCourts.is_active == 1)
        .all()
    )


@router.post("/", response_model=VenueRead, status_code=status.HTTP_201_CREATED)
def create_venue(
    data: VenueCreate,
    db: Session = Depends(get_db),
):
    if data.owner_id is not None and not db.get(DBUsers, data.owner_id):
        raise HTTPException(status_code=404, detail=f"User {data.owner_id} not found")

    # New venues wait for admin approval (moderation_status = pending)
    obj = DBVenues(**data.model_dump())
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.patch("/{id}", response_model=VenueRead)
def update_venue(
    id: int,
    data: VenueUpdate,
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    obj = db.get(DBVenues, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(obj, field, value)

    db.commit()
    db.refresh(obj)

    if data.is_active is False:
        for court in obj.courts:
            invalidate_court_cache(redis, court.id)

    return obj


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_venue(
    id: int,
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    obj = db.get(DBVenues, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")

    obj.is_active = 0
    db.commit()

    for court in obj.courts:
        invalidate_court_cache(redis, court.id)
