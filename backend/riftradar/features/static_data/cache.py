"""
In-memory TTL caches for static reference data.

Each dataset has its own lifetime: the version list moves every patch, Data
Dragon files are immutable per patch, queue metadata barely changes, and the
Community Dragon arena catalog is refreshed a few times a day. Nothing here
is shared across processes; every gateway worker warms its own caches.
"""

import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import structlog

from riftradar.core.riot_api.constants import StaticDataset

logger = structlog.get_logger(__name__)


@dataclass
class _Entry:
    value: Any
    expires_at: float


class TTLCache:
    """Bounded LRU cache whose entries expire ``ttl`` seconds after being set."""

    def __init__(
        self,
        maxsize: int = 100,
        ttl: float = 300,
        clock: Callable[[], float] = time.time,
        name: str = "cache",
    ):
        """
        Args:
            maxsize: Maximum number of entries before the least recently used is evicted
            ttl: Time to live in seconds
            clock: Time source, in seconds
            name: Label used in log events
        """
        self.maxsize = maxsize
        self.ttl = ttl
        self.name = name
        self._clock = clock
        self._entries: "OrderedDict[str, _Entry]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Optional[Any]:
        """Cached value for ``key``, or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if self._clock() >= entry.expires_at:
            del self._entries[key]
            self._misses += 1
            logger.debug("Cache entry expired", cache=self.name, key=key)
            return None

        self._entries.move_to_end(key)
        self._hits += 1
        return entry.value

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` for ``ttl`` seconds."""
        self._entries[key] = _Entry(value, self._clock() + self.ttl)
        self._entries.move_to_end(key)
        while len(self._entries) > self.maxsize:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Cache eviction", cache=self.name, key=evicted)

    def clear(self) -> None:
        """Drop every entry and reset the hit counters."""
        self._entries.clear()
        self._hits = self._misses = 0

    def stats(self) -> Dict[str, Any]:
        lookups = self._hits + self._misses
        return {
            "size": len(self._entries),
            "maxsize": self.maxsize,
            "ttl": self.ttl,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / lookups if lookups else 0.0,
        }

    def __len__(self) -> int:
        return len(self._entries)


VERSIONS_TTL = 30 * 60
DDRAGON_FILE_TTL = 24 * 60 * 60
QUEUES_TTL = 7 * 24 * 60 * 60
ARENA_AUGMENTS_TTL = 6 * 60 * 60

# (maxsize, ttl) per dataset; patch-scoped files keep a few patches around
_DATASET_CACHE_SPECS = {
    StaticDataset.SUMMONER_SPELLS: (4, DDRAGON_FILE_TTL),
    StaticDataset.RUNE_TREES: (4, DDRAGON_FILE_TTL),
    StaticDataset.CHAMPIONS: (4, DDRAGON_FILE_TTL),
    StaticDataset.QUEUE_MAP: (1, QUEUES_TTL),
    StaticDataset.ARENA_AUGMENTS: (4, ARENA_AUGMENTS_TTL),
}


class StaticDataCache:
    """Per-dataset caches used by the static data aggregator."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self.versions = TTLCache(maxsize=1, ttl=VERSIONS_TTL, clock=clock, name="versions")
        self.datasets: Dict[StaticDataset, TTLCache] = {
            dataset: TTLCache(maxsize=maxsize, ttl=ttl, clock=clock, name=dataset.value)
            for dataset, (maxsize, ttl) in _DATASET_CACHE_SPECS.items()
        }

    def for_dataset(self, dataset: StaticDataset) -> TTLCache:
        return self.datasets[dataset]

    def get_stats(self) -> Dict[str, Any]:
        """Statistics of every cache, keyed by dataset name."""
        stats = {"versions": self.versions.stats()}
        stats.update({dataset.value: cache.stats() for dataset, cache in self.datasets.items()})
        return stats

    def clear_all(self) -> None:
        self.versions.clear()
        for cache in self.datasets.values():
            cache.clear()
        logger.info("Static data caches cleared")
