# backend/sportbook/services/slots/config.py
"""
Slot configuration and time helpers.

All times are "HH:MM" wall-clock strings in the venue's local time.
Internally they are handled as minutes since midnight.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache


class MalformedTimeInput(ValueError):
    """A date or "HH:MM" string could not be parsed."""


class DateOutOfRange(ValueError):
    """Requested date is further ahead than the booking horizon."""


@dataclass(frozen=True)
class SlotsConfig:
    """
    Configuration for slot generation.

    Attributes:
        slot_minutes: Length of one bookable unit (one hour)
        default_filter_start: Filter window start when none is given
        default_filter_end: Filter window end when none is given
        currency_symbol: Suffix used in slot labels
        thousands_separator: Digit grouping used in slot labels
        cache_ttl_seconds: Redis TTL for computed slot lists
        horizon_days: How many days ahead slots may be requested
    """
    slot_minutes: int = 60
    default_filter_start: str = "00:00"
    default_filter_end: str = "23:59"
    currency_symbol: str = "đ"
    thousands_separator: str = ","
    cache_ttl_seconds: int = 3600
    horizon_days: int = 60

    def __post_init__(self):
        if self.slot_minutes <= 0 or (24 * 60) % self.slot_minutes:
            raise ValueError(f"slot_minutes must divide a day, got {self.slot_minutes}")


@lru_cache
def get_slots_config() -> SlotsConfig:
    """Get slots configuration (singleton)."""
    return SlotsConfig()


def time_str_to_minutes(value: str) -> int:
    """
    Convert "HH:MM" to minutes since midnight.

    "24:00" is accepted as the end-of-day bound (1440).
    """
    if not isinstance(value, str):
        raise MalformedTimeInput(f"Time must be a 'HH:MM' string, got {value!r}")

    parts = value.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() and len(p) == 2 for p in parts):
        raise MalformedTimeInput(f"Invalid time {value!r}, expected 'HH:MM'")

    hour, minute = int(parts[0]), int(parts[1])
    if hour == 24 and minute == 0:
        return 24 * 60
    if hour > 23 or minute > 59:
        raise MalformedTimeInput(f"Time out of range: {value!r}")

    return hour * 60 + minute


def minutes_to_time_str(minutes: int) -> str:
    """Convert minutes since midnight to "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_date(value: date | str) -> date:
    """Accept a date or an ISO "YYYY-MM-DD" string."""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as e:
        raise MalformedTimeInput(f"Invalid date {value!r}, expected 'YYYY-MM-DD'") from e


def day_of_week(target_date: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return target_date.isoweekday() % 7


def day_type_for(target_date: date) -> str:
    """"weekend" for Saturday/Sunday, "weekday" otherwise."""
    return "weekend" if day_of_week(target_date) in (0, 6) else "weekday"


def check_horizon(target_date: date, config: SlotsConfig, today: date | None = None) -> None:
    """Raise DateOutOfRange if target_date is more than horizon_days ahead."""
    today = today or date.today()
    if target_date > today + timedelta(days=config.horizon_days):
        raise DateOutOfRange(
            f"Date {target_date.isoformat()} is more than {config.horizon_days} days ahead"
        )
