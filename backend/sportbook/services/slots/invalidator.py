# backend/sportbook/services/slots/invalidator.py
"""
Cache invalidation for court slots.

Triggers:
✓ Court default_availability changed → invalidate all dates
✓ Court pricing changed → invalidate all dates
✓ Court deactivated → invalidate all dates

Does NOT trigger:
✗ Booking created/cancelled (bookings are applied on top of cached slots)
"""

import logging
from datetime import date
from redis import Redis

from .redis_store import SlotsRedisStore

logger = logging.getLogger(__name__)


def invalidate_court_cache(
    redis: Redis,
    court_id: int,
    dates: list[date] | None = None,
) -> int:
    """
    Invalidate cached slots for a court.

    Args:
        redis: Redis client
        court_id: Court ID
        dates: List of specific dates to invalidate,
               or None to invalidate all cached dates

    Returns:
        Number of deleted cache keys
    """
    store = SlotsRedisStore(redis)
    deleted = store.delete_court_slots(court_id, dates)
    logger.info(f"Slots cache invalidated: court={court_id} keys={deleted}")
    return deleted
