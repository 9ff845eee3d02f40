"""Event entities package."""

from .domain_event import (
    EventName,
    EventMeta,
    CategoryEvent,
    ProductEvent,
    ProductCreatedEvent,
    ProductPriceChangedEvent,
    ProductStockChangedEvent,
    UserEvent,
    RoleEvent,
    OrderEvent,
    SettingsUpdatedEvent,
    CacheInvalidateEvent,
    CacheInvalidatePatternEvent,
    CacheClearEvent,
    EVENT_PAYLOAD_TYPES,
)

__all__ = [
    "EventName",
    "EventMeta",

    # Payloads
    "CategoryEvent",
    "ProductEvent",
    "ProductCreatedEvent",
    "ProductPriceChangedEvent",
    "ProductStockChangedEvent",
    "UserEvent",
    "RoleEvent",
    "OrderEvent",
    "SettingsUpdatedEvent",
    "CacheInvalidateEvent",
    "CacheInvalidatePatternEvent",
    "CacheClearEvent",
    "EVENT_PAYLOAD_TYPES",
]
