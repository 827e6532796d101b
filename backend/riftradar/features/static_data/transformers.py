"""Normalization of raw static data payloads."""

import re
from typing import Any, Dict, Iterable, List, Optional

import structlog
from pydantic import ValidationError

from .schemas import ArenaAugment, QueueDescriptor

logger = structlog.get_logger(__name__)

LATEST_CHANNEL = "latest"

# Stripped in this order, each once, from the end of a queue description
QUEUE_NAME_SUFFIXES = (
    " Games",
    " 5v5",
    " Summoner's Rift",
    " Twisted Treeline",
    " Howling Abyss",
)

_SUFFIX_PATTERNS = tuple(
    re.compile(re.escape(suffix) + "$", re.IGNORECASE) for suffix in QUEUE_NAME_SUFFIXES
)


def derive_release_channel(patch_version: Optional[str]) -> str:
    """
    Community Dragon channel for a Data Dragon patch.

    "14.10.1" -> "14.10". Anything with fewer than two dot-separated parts
    uses the "latest" channel.
    """
    if not patch_version or patch_version == LATEST_CHANNEL:
        return LATEST_CHANNEL

    parts = patch_version.split(".")
    if len(parts) >= 2:
        return f"{parts[0]}.{parts[1]}"

    logger.warning(
        "Patch format not usable for Community Dragon, using latest channel",
        patch_version=patch_version,
    )
    return LATEST_CHANNEL


def _valid_augment_id(value: Any) -> bool:
    # bool is an int subclass; Community Dragon never uses 0 as an id
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def normalize_arena_augments(raw: Any) -> Dict[int, ArenaAugment]:
    """
    Re-key the augment catalog by numeric id.

    Accepts the string-keyed object Community Dragon publishes (the keys are
    discarded) or a plain list of entries. Entries without a usable numeric
    id, or that fail validation, are dropped.
    """
    if isinstance(raw, dict):
        entries: Iterable[Any] = raw.values()
    elif isinstance(raw, list):
        entries = raw
    else:
        return {}

    processed: Dict[int, ArenaAugment] = {}
    dropped = 0
    for entry in entries:
        if not isinstance(entry, dict) or not _valid_augment_id(entry.get("id")):
            dropped += 1
            continue
        try:
            augment = ArenaAugment.model_validate(entry)
        except ValidationError:
            dropped += 1
            continue
        processed[augment.id] = augment

    if dropped:
        logger.debug("Dropped malformed arena augments", dropped=dropped)
    return processed


def clean_queue_description(description: str) -> str:
    """
    Strip trailing qualifier phrases from a queue description.

    Each of ``QUEUE_NAME_SUFFIXES`` is removed once, in order, and matched
    case-insensitively: queues.json mixes " Games" and " games", and both
    are stripped.
    """
    cleaned = description
    for pattern in _SUFFIX_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return cleaned.strip()


def queue_display_name(description: Optional[str], map_name: Optional[str]) -> Optional[str]:
    """Display name from the description, or the raw map name when there is none."""
    if description:
        return clean_queue_description(description)
    return map_name


def build_queue_descriptors(queues: Any) -> List[QueueDescriptor]:
    """Turn Riot's queues.json entries into descriptors, skipping unusable ones."""
    if not isinstance(queues, list):
        return []

    descriptors: List[QueueDescriptor] = []
    for queue in queues:
        if not isinstance(queue, dict):
            continue
        queue_id = queue.get("queueId")
        if not isinstance(queue_id, int) or isinstance(queue_id, bool):
            continue
        display_name = queue_display_name(queue.get("description"), queue.get("map"))
        if display_name is None:
            continue
        descriptors.append(QueueDescriptor(queue_id=queue_id, display_name=display_name))
    return descriptors


def build_game_mode_map(queues: Any) -> Dict[int, str]:
    """queueId -> display name mapping."""
    return {
        descriptor.queue_id: descriptor.display_name
        for descriptor in build_queue_descriptors(queues)
    }
