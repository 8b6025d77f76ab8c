# backend/sportbook/routers/bookings.py
"""
Bookings API.

Status machine:
  pending → confirmed → completed
  pending | confirmed → cancelled

PATCH and DELETE are not exposed: bookings change only through the
status endpoints below.
"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.generated import (
    Bookings as DBBookings,
    Courts as DBCourts,
    Users as DBUsers,
)
from ..schemas.bookings import (
    BookingCancel,
    BookingCreate,
    BookingRead,
)
from ..services.booking_quote import PriceUnavailable, SlotUnavailable, quote_booking
from ..services.events import emit_event
from ..services.loyalty import (
    award_booking_points,
    get_tier,
    refund_booking_points,
    tier_discount,
)
from ..services.slots import DateOutOfRange, MalformedTimeInput, get_slots_config
from ..services.slots.availability import get_court_bookings, load_schedule
from ..services.slots.config import check_horizon, time_str_to_minutes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])

ALLOWED_TRANSITIONS = {
    "pending": {"confirmed", "cancelled"},
    "confirmed": {"completed", "cancelled"},
    "completed": set(),
    "cancelled": set(),
}


# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────

def get_booking_or_404(id: int, db: Session) -> DBBookings:
    obj = db.get(DBBookings, id)
    if not obj:
        raise HTTPException(status_code=404, detail="Not found")
    return obj


def check_transition(booking: DBBookings, new_status: str):
    """Raise 400 if the status change is not allowed."""
    if new_status not in ALLOWED_TRANSITIONS[booking.status]:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot change booking status from {booking.status} to {new_status}",
        )


def _now() -> str:
    return datetime.now().isoformat(sep=" ", timespec="seconds")


def _overlaps(booking: DBBookings, start_min: int, end_min: int) -> bool:
    b_start = time_str_to_minutes(booking.start_time)
    b_end = time_str_to_minutes(booking.end_time)
    return start_min < b_end and b_start < end_min


# ──────────────────────────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────────────────────────

@router.get("/", response_model=list[BookingRead])
def list_bookings(
    user_id: Optional[int] = None,
    court_id: Optional[int] = None,
    booking_status: Optional[str] = Query(None, alias="status"),
    db: Session = Depends(get_db),
):
    query = db.query(DBBookings)
    if user_id is not None:
        query = query.filter(DBBookings.user_id == user_id)
    if court_id is not None:
        query = query.filter(DBBookings.court_id == court_id)
    if booking_status:
        query = query.filter(DBBookings.status == booking_status)
    return query.order_by(DBBookings.date.desc(), DBBookings.start_time).all()


@router.get("/{id}", response_model=BookingRead)
def get_booking(id: int, db: Session = Depends(get_db)):
    return get_booking_or_404(id, db)


@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    data: BookingCreate,
    db: Session = Depends(get_db),
):
    """
    Book a contiguous run of one-hour slots.

    Price is the sum of the slot prices minus the user's tier discount.
    """
    user = db.get(DBUsers, data.user_id)
    if not user or not user.is_active:
        raise HTTPException(status_code=404, detail=f"User {data.user_id} not found")
    if user.is_banned:
        raise HTTPException(status_code=403, detail="User is banned")

    court = db.get(DBCourts, data.court_id)
    if not court or not court.is_active:
        raise HTTPException(status_code=404, detail="Court not found or inactive")

    venue = court.venue
    if not venue or not venue.is_active or venue.moderation_status != "approved":
        raise HTTPException(status_code=404, detail="Venue not found or inactive")

    if data.date < date.today():
        raise HTTPException(status_code=400, detail="Date cannot be in the past")
    try:
        check_horizon(data.date, get_slots_config())
    except DateOutOfRange as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        slots, total_price = quote_booking(
            load_schedule(court),
            data.date,
            data.start_time,
            data.end_time,
        )
    except (MalformedTimeInput, SlotUnavailable, PriceUnavailable) as e:
        raise HTTPException(status_code=400, detail=str(e))

    start_min = time_str_to_minutes(data.start_time)
    end_min = time_str_to_minutes(data.end_time)
    existing = get_court_bookings(db, court.id, data.date)
    if any(_overlaps(b, start_min, end_min) for b in existing):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Time slot is already booked",
        )

    discount = tier_discount(total_price, get_tier(user.reward_points))

    obj = DBBookings(
        user_id=user.id,
        court_id=court.id,
        venue_id=court.venue_id,
        date=data.date.isoformat(),
        start_time=slots[0].start,
        end_time=slots[-1].end,
        status="pending",
        total_price=total_price,
        discount=discount,
        final_price=max(0, total_price - discount),
        notes=data.notes,
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)

    logger.info(
        f"Booking {obj.id} created: court {court.id} {obj.date} "
        f"{obj.start_time}-{obj.end_time} total={total_price:.0f}"
    )
    emit_event("booking_created", {
        "booking_id": obj.id,
        "user_id": user.id,
        "court_id": court.id,
        "date": obj.date,
        "start_time": obj.start_time,
        "end_time": obj.end_time,
    })

    return obj


@router.post("/{id}/confirm", response_model=BookingRead)
def confirm_booking(id: int, db: Session = Depends(get_db)):
    obj = get_booking_or_404(id, db)
    check_transition(obj, "confirmed")

    obj.status = "confirmed"
    obj.updated_at = _now()
    db.commit()
    db.refresh(obj)

    emit_event("booking_confirmed", {"booking_id": obj.id, "user_id": obj.user_id})
    return obj


@router.post("/{id}/complete", response_model=BookingRead)
def complete_booking(id: int, db: Session = Depends(get_db)):
    """Mark as played and credit loyalty points."""
    obj = get_booking_or_404(id, db)
    check_transition(obj, "completed")

    obj.status = "completed"
    obj.updated_at = _now()
    try:
        award_booking_points(db, obj)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    db.refresh(obj)

    emit_event("booking_completed", {
        "booking_id": obj.id,
        "user_id": obj.user_id,
        "points_earned": obj.points_earned,
    })
    return obj


@router.post("/{id}/cancel", response_model=BookingRead)
def cancel_booking(
    id: int,
    data: Optional[BookingCancel] = None,
    db: Session = Depends(get_db),
):
    """Cancel and return any redeemed points."""
    obj = get_booking_or_404(id, db)
    check_transition(obj, "cancelled")

    obj.status = "cancelled"
    obj.cancel_reason = data.reason if data else None
    obj.updated_at = _now()
    try:
        refund_booking_points(db, obj)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    db.commit()
    db.refresh(obj)

    emit_event("booking_cancelled", {"booking_id": obj.id, "user_id": obj.user_id})
    return obj


@router.patch("/{id}")
def patch_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )


@router.delete("/{id}")
def delete_not_allowed():
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail="Method not allowed",
    )
