"""
backend/sportbook/services/events.py

Event emitter: pushes booking events to a Redis queue for notification
workers (email, push) that live outside this service.

Queue: events:p2p, one event per affected user.
"""

import json
import time
import logging

from ..redis_client import redis_client

logger = logging.getLogger(__name__)

EVENTS_QUEUE = "events:p2p"


def emit_event(event_type: str, payload: dict) -> None:
    """
    Emit an event.

    Pushed to Redis list `events:p2p`. Delivery failures are logged and
    never break the request that produced the event.
    """
    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis_client.rpush(EVENTS_QUEUE, json.dumps(event))
        logger.info(f"Event emitted: {event_type} → {EVENTS_QUEUE}")
    except Exception as e:
        logger.error(f"Failed to emit event {event_type}: {e}")
