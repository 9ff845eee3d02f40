"""Cache adapters package."""

from .memory_adapter import MemoryCache, MemoryCacheEntry, compile_key_pattern

__all__ = ["MemoryCache", "MemoryCacheEntry", "compile_key_pattern"]
