"""Default subscriber wiring.

Registers an audit log line for each event family and the cache
invalidation policy. Wiring happens at most once per bus.
"""

import logging

from ....config.logging_config import AUDIT_LOGGER
from ..entities import EventName

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger(AUDIT_LOGGER)

AUDITED_EVENTS = (
    EventName.CATEGORY_CREATED,
    EventName.CATEGORY_UPDATED,
    EventName.CATEGORY_DELETED,
    EventName.PRODUCT_CREATED,
    EventName.PRODUCT_UPDATED,
    EventName.PRODUCT_DELETED,
    EventName.PRODUCT_PRICE_CHANGED,
    EventName.PRODUCT_STOCK_CHANGED,
    EventName.USER_CREATED,
    EventName.USER_UPDATED,
    EventName.USER_DELETED,
    EventName.USER_LOGIN,
    EventName.USER_LOGOUT,
    EventName.ROLE_CREATED,
    EventName.ROLE_UPDATED,
    EventName.ROLE_DELETED,
    EventName.ORDER_CREATED,
    EventName.ORDER_UPDATED,
    EventName.ORDER_CANCELLED,
    EventName.ORDER_PAID,
    EventName.ORDER_SHIPPED,
    EventName.SETTINGS_UPDATED,
)


def _audit(name: EventName):
    def handler(payload) -> None:
        meta = getattr(payload, "meta", None)
        actor = meta.user_id if meta else None
        subject = getattr(payload, "id", None) or getattr(payload, "key", None)
        audit_logger.info(f"{name.value} subject={subject} actor={actor}")

    handler.__qualname__ = f"audit[{name.value}]"
    return handler


def register_subscribers(bus, cache) -> bool:
    """Attach the default subscribers to ``bus``.

    Returns:
        False when the bus was already wired, True otherwise.
    """
    from ...cache.services import CacheInvalidationSubscriber

    if bus.is_initialized:
        logger.debug("Event subscribers already registered")
        return False

    for name in AUDITED_EVENTS:
        bus.subscribe(name, _audit(name))

    CacheInvalidationSubscriber(cache).register(bus)

    bus.mark_initialized()
    logger.info("Event subscribers registered")
    return True
