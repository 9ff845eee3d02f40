"""In-memory TTL cache for storefront-admin.

Entries expire lazily: an expired entry is dropped when it is next read or
listed, never by a background sweep. Keys follow the ``entity:id`` and
``entity:*`` conventions so families of entries can be evicted by glob.
"""

import logging
import re
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Pattern

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300


@dataclass
class MemoryCacheEntry:
    """Memory cache entry with its absolute expiry."""
    value: Any
    expires_at: float
    created_at: float = field(default_factory=time.time)

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


def compile_key_pattern(pattern: str) -> Pattern:
    """Translate a key glob into a whole-key regex.

    ``*`` matches any run of characters (including ``:``); every other
    character, ``?`` and ``[`` included, matches itself.
    """
    parts = [re.escape(part) for part in pattern.split("*")]
    return re.compile("^" + ".*".join(parts) + "$", re.DOTALL)


class MemoryCache:
    """Thread-safe key/value cache with per-entry TTL."""

    def __init__(
        self,
        default_ttl: int = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.default_ttl = default_ttl
        self._clock = clock or time.time
        self._store: Dict[str, MemoryCacheEntry] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[Any]:
        """Return the live value for ``key`` or None, evicting it if expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock()):
                del self._store[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store ``value`` under ``key``, replacing any existing entry."""
        ttl = self.default_ttl if ttl is None else ttl
        now = self._clock()
        with self._lock:
            self._store[key] = MemoryCacheEntry(value=value, expires_at=now + ttl, created_at=now)

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def invalidate(self, key: str) -> bool:
        """Remove one key. Returns whether it was present."""
        with self._lock:
            return self._store.pop(key, None) is not None

    def invalidate_pattern(self, pattern: str) -> int:
        """Remove every key matching the glob ``pattern``."""
        regex = compile_key_pattern(pattern)
        with self._lock:
            matched = [key for key in self._store if regex.match(key)]
            for key in matched:
                del self._store[key]
        if matched:
            logger.debug(f"Invalidated {len(matched)} keys matching {pattern}")
        return len(matched)

    def clear(self) -> int:
        with self._lock:
            count = len(self._store)
            self._store.clear()
        logger.debug(f"Cleared {count} cache entries")
        return count

    def keys(self) -> List[str]:
        """List live keys, dropping any expired entries found on the way."""
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._store.items() if entry.is_expired(now)]
            for key in expired:
                del self._store[key]
            return list(self._store)

    @property
    def size(self) -> int:
        return len(self.keys())
