from unittest.mock import AsyncMock

import pytest

from riftradar.core.riot_api import RiotAPIClient
from riftradar.core.riot_api.errors import NotFoundError
from riftradar.core.riot_api.models import (
    AccountDTO,
    ChampionMasteryDTO,
    CurrentGameInfoDTO,
    LeagueEntryDTO,
    SummonerDTO,
)
from riftradar.features.players.service import PlayerProfileService


@pytest.fixture
def mock_riot_client(summoner_payload, league_entry_payload, mastery_payload):
    client = AsyncMock(spec=RiotAPIClient)
    client.get_puuid_by_riot_id.return_value = "test-puuid-123"
    client.get_account_by_puuid.return_value = AccountDTO(
        puuid="test-puuid-123", gameName="TestPlayer", tagLine="EUW"
    )
    client.get_summoner_by_puuid.return_value = SummonerDTO.model_validate(summoner_payload)
    client.get_league_entries_by_summoner_id.return_value = [
        LeagueEntryDTO.model_validate(league_entry_payload)
    ]
    client.get_champion_mastery_by_puuid.return_value = [
        ChampionMasteryDTO.model_validate(entry) for entry in mastery_payload
    ]
    client.get_current_game_by_puuid.return_value = None
    return client


@pytest.fixture
def service(mock_riot_client):
    return PlayerProfileService(mock_riot_client)


async def test_profile_for_player_not_in_game(service, mock_riot_client):
    """A player outside a live game still gets a full profile"""
    profile = await service.get_profile("TestPlayer", "EUW", "EUW1")

    assert profile.puuid == "test-puuid-123"
    assert profile.platform_id == "euw1"
    assert profile.summoner.summoner_level == 312
    assert profile.ranked_entries[0].tier == "GOLD"
    assert profile.champion_masteries[0].champion_id == 238
    assert profile.live_game is None
    assert not profile.in_game
    mock_riot_client.get_league_entries_by_summoner_id.assert_awaited_once_with(
        "enc-summoner-id", "euw1"
    )


async def test_profile_uses_current_riot_id(service, mock_riot_client):
    mock_riot_client.get_account_by_puuid.return_value = AccountDTO(
        puuid="test-puuid-123", gameName="NewName", tagLine="0001"
    )

    profile = await service.get_profile("OldName", "EUW", "euw1")

    assert (profile.game_name, profile.tag_line) == ("NewName", "0001")


async def test_profile_keeps_searched_name_without_account(service, mock_riot_client):
    mock_riot_client.get_account_by_puuid.return_value = None

    profile = await service.get_profile("TestPlayer", "EUW", "euw1")

    assert (profile.game_name, profile.tag_line) == ("TestPlayer", "EUW")


async def test_profile_with_live_game(service, mock_riot_client, live_game_payload):
    mock_riot_client.get_current_game_by_puuid.return_value = (
        CurrentGameInfoDTO.model_validate(live_game_payload)
    )

    profile = await service.get_profile("TestPlayer", "EUW", "euw1")

    assert profile.in_game
    assert profile.live_game.game_id == 6612345678


async def test_profile_without_summoner_id_skips_ranked(service, mock_riot_client, summoner_payload):
    payload = {key: value for key, value in summoner_payload.items() if key != "id"}
    mock_riot_client.get_summoner_by_puuid.return_value = SummonerDTO.model_validate(payload)

    profile = await service.get_profile("TestPlayer", "EUW", "euw1")

    assert profile.ranked_entries == []
    mock_riot_client.get_league_entries_by_summoner_id.assert_not_called()


async def test_unknown_riot_id_propagates_not_found(service, mock_riot_client):
    mock_riot_client.get_puuid_by_riot_id.side_effect = NotFoundError(
        "Player Nobody#000 not found on euw1.", status_code=404
    )

    with pytest.raises(NotFoundError):
        await service.get_profile("Nobody", "000", "euw1")

    mock_riot_client.get_summoner_by_puuid.assert_not_called()
