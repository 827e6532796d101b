from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from riftradar.core.dependencies import get_riot_client
from riftradar.core.riot_api import RiotAPIClient
from riftradar.core.riot_api.errors import NotFoundError, RateLimitError
from riftradar.core.riot_api.models import LeagueEntryDTO, SummonerDTO
from riftradar.main import app


@pytest.fixture
def mock_riot_client():
    return AsyncMock(spec=RiotAPIClient)


@pytest.fixture
def client(mock_riot_client):
    app.dependency_overrides[get_riot_client] = lambda: mock_riot_client
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_resolve_riot_id(client, mock_riot_client):
    mock_riot_client.get_puuid_by_riot_id.return_value = "test-puuid-123"

    response = client.get("/api/v1/players/EUW1/riot-id/Test Player/EUW")

    assert response.status_code == 200
    assert response.json() == {
        "puuid": "test-puuid-123",
        "game_name": "Test Player",
        "tag_line": "EUW",
        "platform_id": "euw1",
    }
    mock_riot_client.get_puuid_by_riot_id.assert_awaited_once_with(
        "Test Player", "EUW", "EUW1"
    )


def test_resolve_riot_id_too_long(client, mock_riot_client):
    response = client.get("/api/v1/players/euw1/riot-id/ThisNameIsWayTooLong/EUW")

    assert response.status_code == 400
    mock_riot_client.get_puuid_by_riot_id.assert_not_called()


def test_unknown_riot_id_maps_to_404(client, mock_riot_client):
    mock_riot_client.get_puuid_by_riot_id.side_effect = NotFoundError(
        "Player Nobody#000 not found on euw1.", status_code=404
    )

    response = client.get("/api/v1/players/euw1/riot-id/Nobody/000")

    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


def test_rate_limited_maps_to_429(client, mock_riot_client):
    mock_riot_client.get_summoner_by_puuid.side_effect = RateLimitError(
        "Riot API rate limit exceeded", tier="short", identifier="summoner:p-euw1"
    )

    response = client.get("/api/v1/players/euw1/by-puuid/p/summoner")

    assert response.status_code == 429
    assert response.json()["tier"] == "short"
    assert response.headers["Retry-After"] == "1"


def test_get_summoner(client, mock_riot_client, summoner_payload):
    mock_riot_client.get_summoner_by_puuid.return_value = SummonerDTO.model_validate(
        summoner_payload
    )

    response = client.get("/api/v1/players/euw1/by-puuid/test-puuid-123/summoner")

    assert response.status_code == 200
    assert response.json()["summonerLevel"] == 312


def test_live_game_not_in_game_is_null(client, mock_riot_client):
    mock_riot_client.get_current_game_by_puuid.return_value = None

    response = client.get("/api/v1/players/euw1/by-puuid/p/live-game")

    assert response.status_code == 200
    assert response.json() is None


def test_bulk_ranked(client, mock_riot_client, league_entry_payload):
    mock_riot_client.get_bulk_league_entries.return_value = {
        "good": [LeagueEntryDTO.model_validate(league_entry_payload)],
        "bad": None,
    }

    response = client.post(
        "/api/v1/players/ranked/bulk",
        json={
            "summonerInputs": [
                {"summonerId": "good", "platformId": "euw1"},
                {"summonerId": "bad", "platformId": "kr"},
            ]
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["bad"] is None
    assert body["good"][0]["tier"] == "GOLD"
    mock_riot_client.get_bulk_league_entries.assert_awaited_once_with(
        [("good", "euw1"), ("bad", "kr")]
    )


def test_bulk_ranked_requires_inputs(client):
    response = client.post("/api/v1/players/ranked/bulk", json={"summonerInputs": []})

    assert response.status_code == 422


@pytest.mark.parametrize("platform_id", ["evil.io%23", "evil.io"])
def test_platform_id_must_be_alphanumeric(client, mock_riot_client, platform_id):
    response = client.get(f"/api/v1/players/{platform_id}/by-puuid/abc/summoner")

    assert response.status_code == 422
    mock_riot_client.get_summoner_by_puuid.assert_not_called()
