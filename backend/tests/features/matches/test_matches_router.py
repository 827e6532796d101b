from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from riftradar.core.dependencies import get_riot_client
from riftradar.core.riot_api import RiotAPIClient
from riftradar.core.riot_api.errors import UpstreamFailureError
from riftradar.core.riot_api.models import MatchDTO, MatchListOptions
from riftradar.main import app


@pytest.fixture
def mock_riot_client():
    return AsyncMock(spec=RiotAPIClient)


@pytest.fixture
def client(mock_riot_client):
    app.dependency_overrides[get_riot_client] = lambda: mock_riot_client
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_match_ids_forward_filters(client, mock_riot_client):
    mock_riot_client.get_match_ids_by_puuid.return_value = ["EUW1_1", "EUW1_2"]

    response = client.get(
        "/api/v1/matches/euw1/by-puuid/p/ids",
        params={"queue": 420, "count": 2, "startTime": 1700000000},
    )

    assert response.status_code == 200
    assert response.json() == {"items": ["EUW1_1", "EUW1_2"], "next_cursor": 2}
    puuid, platform_id, options = mock_riot_client.get_match_ids_by_puuid.await_args.args
    assert (puuid, platform_id) == ("p", "euw1")
    assert options == MatchListOptions(queue=420, count=2, start_time=1700000000)


def test_match_ids_full_page_advances_cursor(client, mock_riot_client):
    mock_riot_client.get_match_ids_by_puuid.return_value = [f"EUW1_{i}" for i in range(10)]

    response = client.get(
        "/api/v1/matches/euw1/by-puuid/p/ids", params={"start": 20, "count": 10}
    )

    assert response.status_code == 200
    assert response.json()["next_cursor"] == 30


def test_match_ids_short_page_has_no_cursor(client, mock_riot_client):
    mock_riot_client.get_match_ids_by_puuid.return_value = ["EUW1_1", "EUW1_2"]

    response = client.get(
        "/api/v1/matches/euw1/by-puuid/p/ids", params={"start": 20, "count": 10}
    )

    assert response.status_code == 200
    assert response.json() == {"items": ["EUW1_1", "EUW1_2"], "next_cursor": None}


def test_match_ids_empty_history(client, mock_riot_client):
    mock_riot_client.get_match_ids_by_puuid.return_value = []

    response = client.get("/api/v1/matches/euw1/by-puuid/p/ids")

    assert response.json() == {"items": [], "next_cursor": None}


def test_match_ids_count_out_of_range(client):
    response = client.get("/api/v1/matches/euw1/by-puuid/p/ids", params={"count": 500})

    assert response.status_code == 422


def test_get_match(client, mock_riot_client, match_payload):
    mock_riot_client.get_match.return_value = MatchDTO.model_validate(match_payload)

    response = client.get("/api/v1/matches/euw1/EUW1_1234567890")

    assert response.status_code == 200
    assert response.json()["metadata"]["matchId"] == "EUW1_1234567890"


def test_upstream_failure_maps_to_502(client, mock_riot_client):
    mock_riot_client.get_match.side_effect = UpstreamFailureError(
        "Failed to fetch match details for EUW1_1 (503).", status_code=503
    )

    response = client.get("/api/v1/matches/euw1/EUW1_1")

    assert response.status_code == 502
    assert response.json()["upstream_status"] == 503
