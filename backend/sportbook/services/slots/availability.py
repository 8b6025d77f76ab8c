# backend/sportbook/services/slots/availability.py
"""
Court availability for a day.

Takes into account:
- Computed slots (calculator, cached in Redis)
- Existing pending/confirmed bookings on the court
"""

import json
import logging
from datetime import date

from redis import Redis
from sqlalchemy.orm import Session

from .calculator import Slot, compute_slots
from .config import (
    SlotsConfig,
    check_horizon,
    day_type_for,
    get_slots_config,
    parse_date,
    time_str_to_minutes,
)
from .redis_store import SlotsRedisStore

logger = logging.getLogger(__name__)

ACTIVE_BOOKING_STATUSES = ("pending", "confirmed")


def load_schedule(court):
    """Build a CourtSchedule from a court row (JSON text columns)."""
    from ...schemas.courts import CourtSchedule

    return CourtSchedule(
        default_availability=json.loads(court.default_availability or "[]"),
        pricing=json.loads(court.pricing or "[]"),
    )


def calculate_court_availability(
    db: Session,
    court_id: int,
    target_date: date | str,
    filter_start: str | None = None,
    filter_end: str | None = None,
    config: SlotsConfig | None = None,
    redis: Redis | None = None,
) -> dict | None:
    """
    Calculate slots for a court and mark the ones already booked.

    Returns:
        Dict for CourtSlotsResponse, or None if the court or its venue is
        missing, inactive or not approved.

    Raises:
        MalformedTimeInput: date or filter strings cannot be parsed.
        DateOutOfRange: date is beyond config.horizon_days.
    """
    config = config or get_slots_config()
    target_date = parse_date(target_date)
    check_horizon(target_date, config)

    court = _get_court(db, court_id)
    if not court:
        return None

    # Step 1: Get computed slots (cache first)
    slots = _get_slots(court, target_date, filter_start, filter_end, config, redis)

    # Step 2: Subtract booked ranges
    bookings = get_court_bookings(db, court_id, target_date)
    booked = [
        (time_str_to_minutes(b.start_time), time_str_to_minutes(b.end_time))
        for b in bookings
    ]

    result = []
    for slot in slots:
        start_min = time_str_to_minutes(slot.start)
        end_min = time_str_to_minutes(slot.end)
        is_available = not any(
            start_min < b_end and b_start < end_min
            for b_start, b_end in booked
        )
        result.append({**slot.to_dict(), "is_available": is_available})

    return {
        "court_id": court.id,
        "venue_id": court.venue_id,
        "date": target_date.isoformat(),
        "day_type": day_type_for(target_date),
        "slots": result,
    }


def get_court_bookings(
    db: Session,
    court_id: int,
    target_date: date,
) -> list:
    """Get active bookings for court on date."""
    from ...models.generated import Bookings

    return (
        db.query(Bookings)
        .filter(
            Bookings.court_id == court_id,
            Bookings.date == target_date.isoformat(),
            Bookings.status.in_(ACTIVE_BOOKING_STATUSES),
        )
        .all()
    )


# ── Helpers ──────────────────────────────────────────────────────────────


def _get_slots(
    court,
    target_date: date,
    filter_start: str | None,
    filter_end: str | None,
    config: SlotsConfig,
    redis: Redis | None,
) -> list[Slot]:
    """Get computed slots, using Redis cache when available."""
    if redis is not None:
        store = SlotsRedisStore(redis, config)
        cached = store.get_slots(court.id, target_date, filter_start, filter_end)
        if cached is not None:
            return cached

        # Cache miss: calculate and store
        slots = compute_slots(load_schedule(court), target_date, filter_start, filter_end, config)
        store.store_slots(court.id, target_date, slots, filter_start, filter_end)
        logger.debug(f"Slots cached: court={court.id} date={target_date} count={len(slots)}")
        return slots

    # No Redis: calculate on the fly
    return compute_slots(load_schedule(court), target_date, filter_start, filter_end, config)


def _get_court(db: Session, court_id: int):
    """Get active court by ID, only if its venue is active and approved."""
    from ...models.generated import Courts, Venues
    return (
        db.query(Courts)
        .join(Venues, Courts.venue_id == Venues.id)
        .filter(
            Courts.id == court_id,
            Courts.is_active == 1,
            Venues.is_active == 1,
            Venues.moderation_status == "approved",
        )
        .first()
    )
