"""Cache feature.

Process-local TTL cache and its event-driven invalidation.
"""

from .adapters import MemoryCache, compile_key_pattern
from .services import CacheInvalidationSubscriber, cached

__all__ = [
    "MemoryCache",
    "compile_key_pattern",
    "CacheInvalidationSubscriber",
    "cached",
]
