"""Event services package."""

from .event_bus import EventBus, EventHandler, DEFAULT_MAX_LISTENERS
from .subscribers import register_subscribers, AUDITED_EVENTS

__all__ = [
    "EventBus",
    "EventHandler",
    "DEFAULT_MAX_LISTENERS",
    "register_subscribers",
    "AUDITED_EVENTS",
]
