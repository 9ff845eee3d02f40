"""Events feature.

Typed in-process domain events with fire-and-forget and awaited delivery.
"""

from .entities import EventName, EventMeta, EVENT_PAYLOAD_TYPES
from .services import EventBus, register_subscribers

__all__ = [
    "EventName",
    "EventMeta",
    "EVENT_PAYLOAD_TYPES",
    "EventBus",
    "register_subscribers",
]
