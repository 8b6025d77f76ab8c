# backend/sportbook/services/slots/redis_store.py
"""
Redis storage for computed court slots.

Key format: slots:court:{court_id}:{date}:{filter_start}-{filter_end}
Value: JSON list of {"start", "end", "price", "label"} objects.

Filtered and unfiltered requests are cached separately: a filter window
shifts the hour grid, so a filtered list is not a subset of the full day.
An empty list is stored as "[]" and still counts as a cache hit.
"""

import json
from datetime import date
from redis import Redis

from .calculator import Slot
from .config import SlotsConfig, get_slots_config


class SlotsRedisStore:
    """Redis storage wrapper for per-day court slot lists."""

    KEY_PREFIX = "slots:court"

    def __init__(self, redis: Redis, config: SlotsConfig | None = None):
        self.redis = redis
        self.config = config or get_slots_config()

    def _key(
        self,
        court_id: int,
        dt: date,
        filter_start: str | None,
        filter_end: str | None,
    ) -> str:
        start = filter_start or self.config.default_filter_start
        end = filter_end or self.config.default_filter_end
        return f"{self.KEY_PREFIX}:{court_id}:{dt.isoformat()}:{start}-{end}"

    # ── Write ────────────────────────────────────────────────────────────

    def store_slots(
        self,
        court_id: int,
        dt: date,
        slots: list[Slot],
        filter_start: str | None = None,
        filter_end: str | None = None,
    ) -> None:
        key = self._key(court_id, dt, filter_start, filter_end)
        payload = json.dumps([slot.to_dict() for slot in slots], ensure_ascii=False)
        self.redis.setex(key, self.config.cache_ttl_seconds, payload)

    # ── Read ─────────────────────────────────────────────────────────────

    def get_slots(
        self,
        court_id: int,
        dt: date,
        filter_start: str | None = None,
        filter_end: str | None = None,
    ) -> list[Slot] | None:
        """
        Get cached slots.

        Returns:
            List of slots, or None on cache miss.
        """
        raw = self.redis.get(self._key(court_id, dt, filter_start, filter_end))
        if raw is None:
            return None
        if isinstance(raw, bytes):
            raw = raw.decode()
        return [Slot(**item) for item in json.loads(raw)]

    # ── Delete ───────────────────────────────────────────────────────────

    def delete_court_slots(
        self,
        court_id: int,
        dates: list[date] | None = None,
    ) -> int:
        """
        Delete cached slots.

        Args:
            court_id: Court ID
            dates: Specific dates, or None to delete all for the court.

        Returns:
            Number of deleted keys.
        """
        if dates:
            keys = []
            for dt in dates:
                pattern = f"{self.KEY_PREFIX}:{court_id}:{dt.isoformat()}:*"
                keys.extend(self.redis.scan_iter(match=pattern))
        else:
            pattern = f"{self.KEY_PREFIX}:{court_id}:*"
            keys = list(self.redis.scan_iter(match=pattern))

        if not keys:
            return 0

        return self.redis.delete(*keys)
