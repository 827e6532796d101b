"""Static data feature module.

Aggregates Data Dragon, queue metadata and Community Dragon arena data into
a single reference bundle with per-dataset failure isolation.
"""

from .aggregator import StaticDataAggregator
from .cache import StaticDataCache, TTLCache
from .router import router as static_data_router
from .schemas import ArenaAugment, DatasetStatus, QueueDescriptor, StaticDataBundle
from .transformers import (
    build_game_mode_map,
    clean_queue_description,
    derive_release_channel,
    normalize_arena_augments,
)

__all__ = [
    "StaticDataAggregator",
    "StaticDataCache",
    "TTLCache",
    "static_data_router",
    "ArenaAugment",
    "DatasetStatus",
    "QueueDescriptor",
    "StaticDataBundle",
    "build_game_mode_map",
    "clean_queue_description",
    "derive_release_channel",
    "normalize_arena_augments",
]
