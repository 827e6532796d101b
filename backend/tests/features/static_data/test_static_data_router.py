from unittest.mock import AsyncMock

from fastapi.testclient import TestClient

from riftradar.core.riot_api.constants import StaticDataset
from riftradar.features.static_data.aggregator import StaticDataAggregator
from riftradar.features.static_data.dependencies import get_static_data_aggregator
from riftradar.features.static_data.schemas import DatasetStatus, StaticDataBundle
from riftradar.main import app


def test_partial_bundle_is_still_served():
    bundle = StaticDataBundle(
        patch_version="14.10.1",
        augment_channel="14.10",
        game_mode_map={420: "5v5 Ranked Solo"},
        statuses={
            StaticDataset.SUMMONER_SPELLS: DatasetStatus.UNAVAILABLE,
            StaticDataset.RUNE_TREES: DatasetStatus.UNAVAILABLE,
            StaticDataset.CHAMPIONS: DatasetStatus.UNAVAILABLE,
            StaticDataset.QUEUE_MAP: DatasetStatus.LOADED,
            StaticDataset.ARENA_AUGMENTS: DatasetStatus.UNAVAILABLE,
        },
    )
    aggregator = AsyncMock(spec=StaticDataAggregator)
    aggregator.get_bundle.return_value = bundle
    app.dependency_overrides[get_static_data_aggregator] = lambda: aggregator

    try:
        response = TestClient(app).get("/api/v1/static-data")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    body = response.json()
    assert body["patch_version"] == "14.10.1"
    assert body["champion_data"] is None
    assert body["game_mode_map"] == {"420": "5v5 Ranked Solo"}
    assert body["statuses"]["queue_map"] == "loaded"
    assert body["statuses"]["champions"] == "unavailable"


def test_health_check():
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_request_id_is_echoed():
    response = TestClient(app).get("/health", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"
    assert response.headers["X-Response-Time"].endswith("s")
