from unittest.mock import AsyncMock, patch

import httpx
import pytest

from riftradar.core.riot_api.constants import StaticDataset
from riftradar.features.static_data.aggregator import StaticDataAggregator
from riftradar.features.static_data.cache import StaticDataCache
from riftradar.features.static_data.schemas import DatasetStatus, StaticDataBundle

SPELLS = {"data": {"SummonerFlash": {"key": "4", "name": "Flash"}}}
RUNES = [{"id": 8000, "key": "Precision", "slots": []}]
CHAMPIONS = {"data": {"Zed": {"key": "238", "name": "Zed"}}}
QUEUES = [{"queueId": 1700, "map": "Rings of Wrath", "description": "Arena"}]
AUGMENTS = {"augments": [{"id": 1, "name": "Augment A"}]}


class FakeStaticSources:
    """Routes static data requests to canned responses."""

    def __init__(self, versions=None):
        self.responses = {
            "/api/versions.json": (200, versions or ["14.10.1", "14.9.1"]),
            "/cdn/14.10.1/data/en_US/summoner.json": (200, SPELLS),
            "/cdn/14.10.1/data/en_US/runesReforged.json": (200, RUNES),
            "/cdn/14.10.1/data/en_US/champion.json": (200, CHAMPIONS),
            "/docs/lol/queues.json": (200, QUEUES),
            "/14.10/cdragon/arena/en_us.json": (200, AUGMENTS),
            "/latest/cdragon/arena/en_us.json": (200, AUGMENTS),
        }
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url.path)
        status_code, payload = self.responses.get(request.url.path, (404, {}))
        if isinstance(payload, Exception):
            raise payload
        return httpx.Response(status_code, json=payload)


@pytest.fixture
def sources():
    return FakeStaticSources()


@pytest.fixture
async def aggregator(settings, sources):
    aggregator = StaticDataAggregator(
        settings=settings,
        cache=StaticDataCache(),
        transport=httpx.MockTransport(sources),
    )
    yield aggregator
    await aggregator.close()


async def test_bundle_with_all_sources_available(aggregator):
    bundle = await aggregator.get_bundle()

    assert bundle.patch_version == "14.10.1"
    assert bundle.augment_channel == "14.10"
    assert bundle.summoner_spell_data["SummonerFlash"]["name"] == "Flash"
    assert bundle.rune_tree_data == RUNES
    assert bundle.champion_data["Zed"]["key"] == "238"
    assert bundle.game_mode_map == {1700: "Arena"}
    assert bundle.arena_augment_data[1].name == "Augment A"
    assert bundle.unavailable_datasets == []


async def test_failed_dataset_leaves_others_populated(aggregator, sources):
    sources.responses["/cdn/14.10.1/data/en_US/champion.json"] = (500, {})
    sources.responses["/docs/lol/queues.json"] = (
        0,
        httpx.ConnectError("unreachable"),
    )

    bundle = await aggregator.get_bundle()

    assert bundle.champion_data is None
    assert bundle.game_mode_map is None
    assert bundle.status_of(StaticDataset.CHAMPIONS) is DatasetStatus.UNAVAILABLE
    assert set(bundle.unavailable_datasets) == {
        StaticDataset.CHAMPIONS,
        StaticDataset.QUEUE_MAP,
    }
    assert bundle.summoner_spell_data is not None
    assert bundle.rune_tree_data is not None
    assert bundle.arena_augment_data is not None
    assert bundle.is_available(StaticDataset.ARENA_AUGMENTS)
    assert not bundle.is_available(StaticDataset.QUEUE_MAP)


async def test_versions_failure_uses_fallback_patch(aggregator, sources, settings):
    settings.ddragon_fallback_patch = "13.24.1"
    sources.responses["/api/versions.json"] = (503, {})

    assert await aggregator.get_latest_patch_version() == "13.24.1"


async def test_empty_versions_list_uses_fallback_patch(aggregator, sources, settings):
    settings.ddragon_fallback_patch = "13.24.1"
    sources.responses["/api/versions.json"] = (200, [])

    assert await aggregator.get_latest_patch_version() == "13.24.1"


async def test_augments_retry_latest_channel(aggregator, sources):
    sources.responses["/14.10/cdragon/arena/en_us.json"] = (404, {})

    augments = await aggregator.fetch_arena_augments("14.10")

    assert list(augments) == [1]
    assert sources.requests == [
        "/14.10/cdragon/arena/en_us.json",
        "/latest/cdragon/arena/en_us.json",
    ]


async def test_augments_retry_on_unexpected_format(aggregator, sources):
    sources.responses["/14.10/cdragon/arena/en_us.json"] = (200, {"unexpected": True})

    augments = await aggregator.fetch_arena_augments("14.10")

    assert augments is not None
    assert "/latest/cdragon/arena/en_us.json" in sources.requests


async def test_augments_latest_channel_is_not_retried(aggregator, sources):
    sources.responses["/latest/cdragon/arena/en_us.json"] = (500, {})

    assert await aggregator.fetch_arena_augments("latest") is None
    assert sources.requests == ["/latest/cdragon/arena/en_us.json"]


async def test_rune_payload_must_be_a_list(aggregator, sources):
    sources.responses["/cdn/14.10.1/data/en_US/runesReforged.json"] = (200, {"data": {}})

    assert await aggregator.fetch_ddragon_dataset(StaticDataset.RUNE_TREES, "14.10.1") is None


async def test_cached_datasets_are_not_refetched(aggregator, sources):
    await aggregator.get_bundle()
    first_round = len(sources.requests)

    await aggregator.get_bundle()

    assert first_round == 6
    assert len(sources.requests) == first_round


def test_new_bundle_slots_are_pending():
    bundle = StaticDataBundle(patch_version="14.10.1", augment_channel="14.10")

    assert all(
        bundle.status_of(dataset) is DatasetStatus.PENDING for dataset in StaticDataset
    )
    assert bundle.unavailable_datasets == []


async def test_fetch_without_session_raises(aggregator):
    with patch.object(aggregator, "start_session", AsyncMock()):
        with pytest.raises(RuntimeError, match="session not initialized"):
            await aggregator._fetch_json("https://example.invalid/x.json", "versions")
