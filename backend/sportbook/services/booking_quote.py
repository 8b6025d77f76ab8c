# backend/sportbook/services/booking_quote.py
"""
Price a requested booking range against a court's slots.

A booking must cover a contiguous run of the day's slots exactly:
start_time is a slot start, end_time is a slot end, no gaps. Slots come
from the unfiltered day, so a range off the hour grid is rejected.
"""

from datetime import date

from .slots import Slot, SlotsConfig, compute_slots
from .slots.config import time_str_to_minutes


class SlotUnavailable(ValueError):
    """Requested range is not covered by bookable slots."""


class PriceUnavailable(ValueError):
    """A slot in the requested range has no pricing rule."""


def quote_booking(
    schedule,
    target_date: date,
    start_time: str,
    end_time: str,
    config: SlotsConfig | None = None,
) -> tuple[list[Slot], float]:
    """
    Slots covering [start_time, end_time) and their total price.

    Raises:
        MalformedTimeInput: unparsable time.
        SlotUnavailable: range is empty or not tiled by slots.
        PriceUnavailable: a covering slot is priced at zero.
    """
    start_min = time_str_to_minutes(start_time)
    end_min = time_str_to_minutes(end_time)
    if start_min >= end_min:
        raise SlotUnavailable("start_time must be before end_time")

    # Blocks may be listed out of order or overlap; walk each hour once
    covering = {}
    for slot in compute_slots(schedule, target_date, config=config):
        if start_min <= time_str_to_minutes(slot.start) and time_str_to_minutes(slot.end) <= end_min:
            covering.setdefault((slot.start, slot.end), slot)
    slots = sorted(covering.values(), key=lambda s: time_str_to_minutes(s.start))

    expected = start_min
    for slot in slots:
        if time_str_to_minutes(slot.start) != expected:
            raise SlotUnavailable("Court is not available at the requested time")
        expected = time_str_to_minutes(slot.end)

    if not slots or expected != end_min:
        raise SlotUnavailable("Court is not available at the requested time")

    if any(slot.price <= 0 for slot in slots):
        raise PriceUnavailable("Unable to calculate pricing for the requested time")

    return slots, sum(slot.price for slot in slots)
