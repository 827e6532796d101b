"""
Static reference data aggregator.

Fetches the five reference datasets a profile page needs in parallel from
Data Dragon, Riot's static docs and Community Dragon. These sources are not
subject to the Riot API rate gate. Every fetch degrades on its own: a failed
dataset leaves its slot empty and never cancels the others, because a
partial bundle is preferred over no page at all.
"""

import asyncio
from typing import Any, Dict, List, Optional

import httpx
import structlog

from riftradar.core.config import Settings, get_global_settings
from riftradar.core.riot_api.constants import StaticDataset

from .cache import StaticDataCache
from .schemas import ArenaAugment, DatasetStatus, StaticDataBundle
from .transformers import (
    LATEST_CHANNEL,
    build_game_mode_map,
    derive_release_channel,
    normalize_arena_augments,
)

logger = structlog.get_logger(__name__)

DDRAGON_BASE_URL = "https://ddragon.leagueoflegends.com"
VERSIONS_URL = f"{DDRAGON_BASE_URL}/api/versions.json"
DDRAGON_DATA_URL = DDRAGON_BASE_URL + "/cdn/{patch}/data/{locale}/{file_name}.json"
QUEUES_URL = "https://static.developer.riotgames.com/docs/lol/queues.json"
CDRAGON_ARENA_URL = "https://raw.communitydragon.org/{channel}/cdragon/arena/en_us.json"

DDRAGON_FILES = {
    StaticDataset.SUMMONER_SPELLS: "summoner",
    StaticDataset.RUNE_TREES: "runesReforged",
    StaticDataset.CHAMPIONS: "champion",
}


class StaticDataAggregator:
    """Builds a StaticDataBundle from independently fetched datasets."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache: Optional[StaticDataCache] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the aggregator.

        Args:
            settings: Settings override (uses global settings if None)
            cache: Per-dataset caches (a fresh set if None)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.settings = settings or get_global_settings()
        self.cache = cache or StaticDataCache()
        self._transport = transport
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    self.session = httpx.AsyncClient(
                        headers={"User-Agent": self.settings.riot_user_agent},
                        timeout=httpx.Timeout(
                            connect=self.settings.http_connect_timeout,
                            read=self.settings.http_read_timeout,
                            write=self.settings.http_read_timeout,
                            pool=self.settings.http_pool_timeout,
                        ),
                        follow_redirects=True,
                        transport=self._transport,
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()

    async def __aenter__(self):
        await self.start_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _fetch_json(self, url: str, label: str) -> Optional[Any]:
        """GET ``url`` and parse JSON; any failure is logged and yields None."""
        await self.start_session()
        if self.session is None:
            raise RuntimeError("Static data session not initialized")
        try:
            response = await self.session.get(url)
        except httpx.HTTPError as e:
            logger.error(
                "Static data network error",
                dataset=label,
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

        if not response.is_success:
            logger.error(
                "Static data fetch error",
                dataset=label,
                url=url,
                status=response.status_code,
            )
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error("Static data parse error", dataset=label, url=url, error=str(e))
            return None

    async def get_latest_patch_version(self) -> str:
        """Newest Data Dragon patch, or the configured fallback."""
        cached = self.cache.versions.get("latest")
        if cached:
            return cached

        fallback = self.settings.ddragon_fallback_patch
        versions = await self._fetch_json(VERSIONS_URL, "versions")
        if isinstance(versions, list) and versions and isinstance(versions[0], str):
            self.cache.versions.set("latest", versions[0])
            return versions[0]

        logger.warning("Failed to fetch Data Dragon versions, using fallback", fallback=fallback)
        return fallback

    async def fetch_ddragon_dataset(self, dataset: StaticDataset, patch_version: str) -> Optional[Any]:
        """
        Fetch one patch-scoped Data Dragon file.

        Summoner spells and champions yield the payload's ``data`` object,
        rune trees the top-level list.
        """
        file_name = DDRAGON_FILES[dataset]
        locale = self.settings.ddragon_locale
        cache = self.cache.for_dataset(dataset)
        cache_key = f"{patch_version}:{locale}"

        cached = cache.get(cache_key)
        if cached is not None:
            return cached

        url = DDRAGON_DATA_URL.format(patch=patch_version, locale=locale, file_name=file_name)
        payload = await self._fetch_json(url, file_name)
        if payload is None:
            return None

        if dataset is StaticDataset.RUNE_TREES:
            value = payload if isinstance(payload, list) else None
        else:
            data = payload.get("data") if isinstance(payload, dict) else None
            value = data if isinstance(data, dict) else None

        if value is None:
            logger.error("Data Dragon payload not in expected format", dataset=file_name)
            return None

        cache.set(cache_key, value)
        return value

    async def fetch_game_mode_map(self) -> Optional[Dict[int, str]]:
        """queueId -> display name from Riot's queues.json."""
        cache = self.cache.for_dataset(StaticDataset.QUEUE_MAP)
        cached = cache.get("queues")
        if cached is not None:
            return cached

        queues = await self._fetch_json(QUEUES_URL, "queues")
        if not isinstance(queues, list):
            if queues is not None:
                logger.error("Queue metadata not in expected format")
            return None

        game_mode_map = build_game_mode_map(queues)
        cache.set("queues", game_mode_map)
        return game_mode_map

    async def fetch_arena_augments(self, channel: str) -> Optional[Dict[int, ArenaAugment]]:
        """
        Arena augments keyed by numeric id.

        A failed attempt against a specific channel is retried once against
        the "latest" channel.
        """
        cache = self.cache.for_dataset(StaticDataset.ARENA_AUGMENTS)
        channels: List[str] = [channel]
        if channel != LATEST_CHANNEL:
            channels.append(LATEST_CHANNEL)

        for attempt, attempt_channel in enumerate(channels):
            cached = cache.get(attempt_channel)
            if cached is not None:
                return cached

            if attempt:
                logger.info(
                    "Retrying arena augments with latest channel",
                    failed_channel=channel,
                )

            url = CDRAGON_ARENA_URL.format(channel=attempt_channel)
            payload = await self._fetch_json(url, "arena_augments")
            raw = payload.get("augments") if isinstance(payload, dict) else None
            if isinstance(raw, (dict, list)):
                augments = normalize_arena_augments(raw)
                cache.set(attempt_channel, augments)
                return augments

            if payload is not None:
                logger.error(
                    "Arena augment data not in expected format",
                    channel=attempt_channel,
                )

        return None

    async def get_bundle(self) -> StaticDataBundle:
        """Resolve the patch, fetch all five datasets concurrently, and assemble the bundle."""
        patch_version = await self.get_latest_patch_version()
        channel = derive_release_channel(patch_version)
        logger.info(
            "Loading static data",
            patch_version=patch_version,
            augment_channel=channel,
        )

        order = [
            StaticDataset.SUMMONER_SPELLS,
            StaticDataset.RUNE_TREES,
            StaticDataset.CHAMPIONS,
            StaticDataset.QUEUE_MAP,
            StaticDataset.ARENA_AUGMENTS,
        ]
        results = await asyncio.gather(
            self.fetch_ddragon_dataset(StaticDataset.SUMMONER_SPELLS, patch_version),
            self.fetch_ddragon_dataset(StaticDataset.RUNE_TREES, patch_version),
            self.fetch_ddragon_dataset(StaticDataset.CHAMPIONS, patch_version),
            self.fetch_game_mode_map(),
            self.fetch_arena_augments(channel),
            return_exceptions=True,
        )

        values: Dict[StaticDataset, Any] = {}
        statuses: Dict[StaticDataset, DatasetStatus] = {}
        for dataset, result in zip(order, results):
            if isinstance(result, Exception):
                logger.error(
                    "Unexpected error loading static dataset",
                    dataset=dataset.value,
                    error=str(result),
                    error_type=type(result).__name__,
                )
                result = None
            values[dataset] = result
            statuses[dataset] = (
                DatasetStatus.UNAVAILABLE if result is None else DatasetStatus.LOADED
            )

        bundle = StaticDataBundle(
            patch_version=patch_version,
            augment_channel=channel,
            summoner_spell_data=values[StaticDataset.SUMMONER_SPELLS],
            rune_tree_data=values[StaticDataset.RUNE_TREES],
            champion_data=values[StaticDataset.CHAMPIONS],
            game_mode_map=values[StaticDataset.QUEUE_MAP],
            arena_augment_data=values[StaticDataset.ARENA_AUGMENTS],
            statuses=statuses,
        )

        if bundle.is_available(StaticDataset.ARENA_AUGMENTS):
            logger.info(
                "Loaded arena augments", count=len(bundle.arena_augment_data or {})
            )
        if bundle.unavailable_datasets:
            logger.warning(
                "Static data bundle is partial",
                unavailable=[dataset.value for dataset in bundle.unavailable_datasets],
            )
        return bundle
