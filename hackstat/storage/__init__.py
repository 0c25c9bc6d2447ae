"""Storage and caching."""

from hackstat.storage.cache import CacheEntry, CacheStore, MemoryCache

__all__ = ["CacheEntry", "CacheStore", "MemoryCache"]
