"""Read-through helper over the memory cache."""

import logging
from typing import Awaitable, Callable, Optional, TypeVar

from ..adapters import MemoryCache

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def cached(
    cache: MemoryCache,
    key: str,
    loader: Callable[[], Awaitable[T]],
    ttl: Optional[int] = None,
) -> T:
    """Return the cached value for ``key`` or load, store and return it.

    A failing cache read counts as a miss and a failing write is only
    logged; loader errors propagate. ``None`` results are not stored.
    """
    try:
        value = cache.get(key)
    except Exception as e:
        logger.warning(f"Cache read failed for {key}: {e}")
        value = None

    if value is not None:
        return value

    value = await loader()

    if value is not None:
        try:
            cache.set(key, value, ttl)
        except Exception as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    return value
