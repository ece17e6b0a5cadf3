"""Cache providers.

MemoryCacheProvider keeps per-entry TTLs in process memory.  It backs
the hybrid search result cache (5 minutes) and the average-setlist
cache (1 hour).
"""

from src.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
