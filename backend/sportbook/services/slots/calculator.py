# backend/sportbook/services/slots/calculator.py
"""
Slot availability & pricing calculator.

Turns a court's weekly availability template and pricing rules into
priced one-hour slots for a single date:

✓ picks the availability entry for the weekday (0 = Sunday)
✓ intersects every open block with the optional filter window
✓ walks each block in whole-hour steps, a trailing remainder is dropped
✓ prices each slot with the first active rule for the day type

Does NOT contain:
✗ Existing bookings (see availability.py)
✗ Any I/O: pure function of its arguments
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import TYPE_CHECKING, Sequence

from .config import (
    SlotsConfig,
    get_slots_config,
    time_str_to_minutes,
    minutes_to_time_str,
    parse_date,
    day_of_week,
    day_type_for,
)

if TYPE_CHECKING:
    from ...schemas.courts import CourtSchedule, PricingRule


@dataclass(frozen=True)
class Slot:
    start: str
    end: str
    price: float
    label: str

    def to_dict(self) -> dict:
        return asdict(self)


def compute_slots(
    court: CourtSchedule,
    target_date: date | str,
    filter_start: str | None = None,
    filter_end: str | None = None,
    config: SlotsConfig | None = None,
) -> list[Slot]:
    """
    Compute bookable slots for a court on a date.

    Raises:
        MalformedTimeInput: date or any "HH:MM" value cannot be parsed.
    """
    config = config or get_slots_config()
    target_date = parse_date(target_date)

    # Parse the window first so malformed filters fail even on closed days
    window_start = time_str_to_minutes(filter_start or config.default_filter_start)
    window_end = time_str_to_minutes(filter_end or config.default_filter_end)

    weekday = day_of_week(target_date)
    entry = next(
        (e for e in court.default_availability if e.day_of_week == weekday),
        None,
    )
    if entry is None:
        return []

    step = config.slot_minutes
    ranges: list[tuple[int, int]] = []

    for block in entry.time_slots:
        start_min = max(time_str_to_minutes(block.start), window_start)
        end_min = min(time_str_to_minutes(block.end), window_end)

        t = start_min
        while t + step <= end_min:
            ranges.append((t, t + step))
            t += step

    day_type = day_type_for(target_date)
    rules = _parse_rules(court.pricing, day_type)

    slots = []
    for start_min, end_min in ranges:
        price = _find_price(rules, start_min)
        start = minutes_to_time_str(start_min)
        end = minutes_to_time_str(end_min)
        slots.append(Slot(
            start=start,
            end=end,
            price=price,
            label=format_slot_label(start, end, price, config),
        ))

    return slots


def format_slot_label(
    start: str,
    end: str,
    price: float,
    config: SlotsConfig | None = None,
) -> str:
    """Render "14:00 - 15:00 (150,000 đ)"."""
    config = config or get_slots_config()
    grouped = f"{price:,.0f}".replace(",", config.thousands_separator)
    return f"{start} - {end} ({grouped} {config.currency_symbol})"


# ── Helpers ──────────────────────────────────────────────────────────────


def _parse_rules(
    pricing: Sequence[PricingRule],
    day_type: str,
) -> list[tuple[int, int, float]]:
    """Active rules for day_type as (start_min, end_min, price), order kept."""
    return [
        (
            time_str_to_minutes(rule.time_slot.start),
            time_str_to_minutes(rule.time_slot.end),
            rule.price_per_hour,
        )
        for rule in pricing
        if rule.day_type == day_type and rule.is_active
    ]


def _find_price(rules: list[tuple[int, int, float]], start_min: int) -> float:
    for rule_start, rule_end, price in rules:
        if rule_start <= start_min < rule_end:
            return price
    return 0
