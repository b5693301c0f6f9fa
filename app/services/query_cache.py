import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Hashable, Tuple

from app.core.settings import settings

logger = logging.getLogger(__name__)

CacheKey = Tuple[Hashable, ...]


class QueryCache:
    """In-process memo of read-model queries, keyed by tuples.

    Keys are hierarchical so a mutation can drop a whole family at once,
    e.g. ``invalidate(("overview", user_id))`` clears every cached balance,
    category and history result for that user.

    The cache holds at most ``max_entries`` results and evicts the least
    recently used one when full. Every invalidated prefix carries a
    generation number; a loader that was already running when its prefix
    got invalidated returns its result without storing it.
    """

    def __init__(self, max_entries: int = 1024):
        self.max_entries = max_entries
        self._entries: "OrderedDict[CacheKey, Any]" = OrderedDict()
        self._generations: dict[CacheKey, int] = {}
        self._lock = threading.Lock()

    def _generation_of(self, key: CacheKey) -> Tuple[int, ...]:
        return tuple(self._generations.get(key[:i], 0) for i in range(len(key) + 1))

    def get_or_load(self, key: CacheKey, loader: Callable[[], Any]) -> Any:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                return self._entries[key]
            generation = self._generation_of(key)
        value = loader()
        with self._lock:
            if self._generation_of(key) != generation:
                logger.debug(f"Dropped result for {key}, invalidated while loading")
                return value
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return value

    def invalidate(self, prefix: CacheKey) -> int:
        size = len(prefix)
        with self._lock:
            self._generations[prefix] = self._generations.get(prefix, 0) + 1
            stale = [key for key in self._entries if key[:size] == prefix]
            for key in stale:
                del self._entries[key]
        logger.debug(f"Invalidated {len(stale)} cached queries under {prefix}")
        return len(stale)

    def clear(self) -> None:
        self.invalidate(())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries


query_cache = QueryCache(max_entries=settings.QUERY_CACHE_MAX_ENTRIES)
