"""Domain event names and payloads.

The set of event names is closed. Each name has exactly one payload type,
listed in ``EVENT_PAYLOAD_TYPES``; payloads are immutable and carry an
optional ``EventMeta`` whose ``timestamp`` the bus stamps at emission.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, Union


class EventName(str, Enum):
    """Every event the bus can carry."""

    # Category
    CATEGORY_CREATED = "category:created"
    CATEGORY_UPDATED = "category:updated"
    CATEGORY_DELETED = "category:deleted"

    # Product
    PRODUCT_CREATED = "product:created"
    PRODUCT_UPDATED = "product:updated"
    PRODUCT_DELETED = "product:deleted"
    PRODUCT_PRICE_CHANGED = "product:price:changed"
    PRODUCT_STOCK_CHANGED = "product:stock:changed"

    # User
    USER_CREATED = "user:created"
    USER_UPDATED = "user:updated"
    USER_DELETED = "user:deleted"
    USER_LOGIN = "user:login"
    USER_LOGOUT = "user:logout"

    # Role
    ROLE_CREATED = "role:created"
    ROLE_UPDATED = "role:updated"
    ROLE_DELETED = "role:deleted"

    # Order
    ORDER_CREATED = "order:created"
    ORDER_UPDATED = "order:updated"
    ORDER_CANCELLED = "order:cancelled"
    ORDER_PAID = "order:paid"
    ORDER_SHIPPED = "order:shipped"

    # Settings
    SETTINGS_UPDATED = "settings:updated"

    # Cache
    CACHE_INVALIDATE = "cache:invalidate"
    CACHE_INVALIDATE_PATTERN = "cache:invalidate:pattern"
    CACHE_CLEAR_ALL = "cache:clear:all"

    @property
    def family(self) -> str:
        return self.value.split(":", 1)[0]


@dataclass(frozen=True)
class EventMeta:
    """Who triggered an event, from where, and when it was emitted."""

    user_id: Optional[str] = None
    timestamp: Optional[datetime] = None
    ip: Optional[str] = None


Money = Union[Decimal, int, float]


@dataclass(frozen=True)
class CategoryEvent:
    id: str
    name: Optional[str] = None
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class ProductEvent:
    id: str
    name: Optional[str] = None
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class ProductCreatedEvent:
    id: str
    category_id: str
    name: Optional[str] = None
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class ProductPriceChangedEvent:
    id: str
    old_price: Money
    new_price: Money
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class ProductStockChangedEvent:
    id: str
    old_quantity: int
    new_quantity: int
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class UserEvent:
    id: str
    email: Optional[str] = None
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class RoleEvent:
    id: str
    name: str
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class OrderEvent:
    id: str
    order_number: Optional[str] = None
    status: Optional[str] = None
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class SettingsUpdatedEvent:
    key: str
    value: Any = None
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class CacheInvalidateEvent:
    keys: Tuple[str, ...] = field(default_factory=tuple)
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class CacheInvalidatePatternEvent:
    pattern: str
    meta: Optional[EventMeta] = None


@dataclass(frozen=True)
class CacheClearEvent:
    meta: Optional[EventMeta] = None


EVENT_PAYLOAD_TYPES: Dict[EventName, Type] = {
    EventName.CATEGORY_CREATED: CategoryEvent,
    EventName.CATEGORY_UPDATED: CategoryEvent,
    EventName.CATEGORY_DELETED: CategoryEvent,

    EventName.PRODUCT_CREATED: ProductCreatedEvent,
    EventName.PRODUCT_UPDATED: ProductEvent,
    EventName.PRODUCT_DELETED: ProductEvent,
    EventName.PRODUCT_PRICE_CHANGED: ProductPriceChangedEvent,
    EventName.PRODUCT_STOCK_CHANGED: ProductStockChangedEvent,

    EventName.USER_CREATED: UserEvent,
    EventName.USER_UPDATED: UserEvent,
    EventName.USER_DELETED: UserEvent,
    EventName.USER_LOGIN: UserEvent,
    EventName.USER_LOGOUT: UserEvent,

    EventName.ROLE_CREATED: RoleEvent,
    EventName.ROLE_UPDATED: RoleEvent,
    EventName.ROLE_DELETED: RoleEvent,

    EventName.ORDER_CREATED: OrderEvent,
    EventName.ORDER_UPDATED: OrderEvent,
    EventName.ORDER_CANCELLED: OrderEvent,
    EventName.ORDER_PAID: OrderEvent,
    EventName.ORDER_SHIPPED: OrderEvent,

    EventName.SETTINGS_UPDATED: SettingsUpdatedEvent,

    EventName.CACHE_INVALIDATE: CacheInvalidateEvent,
    EventName.CACHE_INVALIDATE_PATTERN: CacheInvalidatePatternEvent,
    EventName.CACHE_CLEAR_ALL: CacheClearEvent,
}
