# backend/sportbook/routers/admin.py
"""
Admin moderation: venue approval and user bans.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from redis import Redis
from sqlalchemy.orm import Session

from ..database import get_db
from ..redis_client import get_redis
from ..models.generated import Users as DBUsers, Venues as DBVenues
from ..schemas.admin import UserBan, VenueModeration
from ..schemas.users import UserRead
from ..schemas.venues import VenueRead
from ..services.events import emit_event
from ..services.slots import invalidate_court_cache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_venue(id: int, db: Session) -> DBVenues:
    obj = db.get(DBVenues, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Venue not found")
    return obj


def _get_user(id: int, db: Session) -> DBUsers:
    obj = db.get(DBUsers, id)
    if not obj:
        raise HTTPException(status_code=404, detail="User not found")
    return obj


@router.get("/venues/pending", response_model=list[VenueRead])
def list_pending_venues(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return (
        db.query(DBVenues)
        .filter(DBVenues.moderation_status == "pending")
        .order_by(DBVenues.created_at.desc(), DBVenues.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


@router.post("/venues/{id}/approve", response_model=VenueRead)
def approve_venue(
    id: int,
    data: VenueModeration | None = None,
    db: Session = Depends(get_db),
):
    obj = _get_venue(id, db)

    obj.moderation_status = "approved"
    obj.verified_at = datetime.now().isoformat(sep=" ", timespec="seconds")
    obj.verification_notes = (data.verification_notes if data else None) or "Approved by admin"
    db.commit()
    db.refresh(obj)

    logger.info(f"Venue {id} approved")
    if obj.owner_id:
        emit_event("venue_approved", {"venue_id": obj.id, "user_id": obj.owner_id})
    return obj


@router.post("/venues/{id}/reject", response_model=VenueRead)
def reject_venue(
    id: int,
    data: VenueModeration | None = None,
    db: Session = Depends(get_db),
    redis: Redis = Depends(get_redis),
):
    obj = _get_venue(id, db)

    obj.moderation_status = "rejected"
    obj.verified_at = None
    obj.verification_notes = (data.verification_notes if data else None) or "Rejected by admin"
    db.commit()
    db.refresh(obj)

    for court in obj.courts:
        invalidate_court_cache(redis, court.id)

    logger.info(f"Venue {id} rejected")
    if obj.owner_id:
        emit_event("venue_rejected", {"venue_id": obj.id, "user_id": obj.owner_id})
    return obj


@router.post("/users/{id}/ban", response_model=UserRead)
def ban_user(
    id: int,
    data: UserBan,
    db: Session = Depends(get_db),
):
    obj = _get_user(id, db)
    if obj.role == "admin":
        raise HTTPException(status_code=400, detail="Cannot ban an admin")

    obj.is_banned = 1
    obj.ban_reason = data.reason
    db.commit()
    db.refresh(obj)

    logger.info(f"User {id} banned: {data.reason}")
    return obj


@router.post("/users/{id}/unban", response_model=UserRead)
def unban_user(id: int, db: Session = Depends(get_db)):
    obj = _get_user(id, db)

    obj.is_banned = 0
    obj.ban_reason = None
    db.commit()
    db.refresh(obj)

    logger.info(f"User {id} unbanned")
    return obj
