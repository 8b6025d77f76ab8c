# backend/sportbook/services/slots/__init__.py
"""
Slots calculation module.

Calculator: pure weekly-template → priced one-hour slots
Store: computed slot lists cached in Redis per court/date/filter
Availability (availability.py): cached slots + existing bookings
"""

from .config import (
    DateOutOfRange,
    MalformedTimeInput,
    SlotsConfig,
    get_slots_config,
)
from .calculator import Slot, compute_slots, format_slot_label
from .redis_store import SlotsRedisStore
from .invalidator import invalidate_court_cache

__all__ = [
    "DateOutOfRange",
    "MalformedTimeInput",
    "SlotsConfig",
    "get_slots_config",
    "Slot",
    "compute_slots",
    "format_slot_label",
    "SlotsRedisStore",
    "invalidate_court_cache",
]
