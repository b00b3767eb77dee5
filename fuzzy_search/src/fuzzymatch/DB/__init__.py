from .api import RecordIndex, make_index
from .cache import CacheEntry, ResultCache, cache_key
from .index import TokenIndex
from .memory_store import MemoryStore, as_record

__all__ = [
    "RecordIndex", "make_index", "CacheEntry", "ResultCache", "cache_key",
    "TokenIndex", "MemoryStore", "as_record",
]
