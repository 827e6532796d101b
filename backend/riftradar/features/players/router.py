"""Player API endpoints."""

from typing import Annotated, Dict, List, Optional

import structlog
from fastapi import APIRouter, HTTPException, Path

from riftradar.core.dependencies import RiotClientDep
from riftradar.core.riot_api.models import (
    AccountDTO,
    ChampionMasteryDTO,
    CurrentGameInfoDTO,
    LeagueEntryDTO,
    SummonerDTO,
)

from .dependencies import PlayerProfileServiceDep
from .schemas import BulkRankedRequest, PlayerProfile, PuuidResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/players", tags=["players"])

# Riot ID validation constants
RIOT_ID_NAME_MAX_LENGTH = 16
RIOT_ID_TAG_MAX_LENGTH = 5

PlatformId = Annotated[
    str,
    Path(
        min_length=2,
        max_length=8,
        pattern=r"^[A-Za-z0-9]+$",
        description="Platform id, e.g. euw1",
    ),
]


def validate_riot_id(game_name: str, tag_line: str) -> tuple[str, str]:
    """Validate Riot ID parts and return them stripped."""
    game_name, tag_line = game_name.strip(), tag_line.strip()

    if not game_name or not tag_line:
        raise HTTPException(status_code=400, detail="Invalid Riot ID format")

    if (
        len(game_name) > RIOT_ID_NAME_MAX_LENGTH
        or len(tag_line) > RIOT_ID_TAG_MAX_LENGTH
    ):
        raise HTTPException(status_code=400, detail="Riot ID too long")

    return game_name, tag_line


@router.get(
    "/{platform_id}/riot-id/{game_name}/{tag_line}", response_model=PuuidResponse
)
async def resolve_riot_id(
    riot_client: RiotClientDep,
    game_name: str,
    tag_line: str,
    platform_id: PlatformId,
):
    """Resolve a Riot ID to its PUUID."""
    game_name, tag_line = validate_riot_id(game_name, tag_line)
    puuid = await riot_client.get_puuid_by_riot_id(game_name, tag_line, platform_id)
    return PuuidResponse(
        puuid=puuid,
        game_name=game_name,
        tag_line=tag_line,
        platform_id=platform_id.lower(),
    )


@router.get(
    "/{platform_id}/riot-id/{game_name}/{tag_line}/profile",
    response_model=PlayerProfile,
)
async def get_player_profile(
    profile_service: PlayerProfileServiceDep,
    game_name: str,
    tag_line: str,
    platform_id: PlatformId,
):
    """
    Full profile for a Riot ID.

    ``live_game`` is null when the player is not currently in a game.
    """
    game_name, tag_line = validate_riot_id(game_name, tag_line)
    return await profile_service.get_profile(game_name, tag_line, platform_id)


@router.get("/{platform_id}/by-puuid/{puuid}/summoner", response_model=SummonerDTO)
async def get_summoner(
    riot_client: RiotClientDep,
    puuid: str,
    platform_id: PlatformId,
):
    """Summoner profile by PUUID."""
    return await riot_client.get_summoner_by_puuid(puuid, platform_id)


@router.get("/{platform_id}/by-puuid/{puuid}/account", response_model=Optional[AccountDTO])
async def get_account(
    riot_client: RiotClientDep,
    puuid: str,
    platform_id: PlatformId,
):
    """Current Riot ID for a PUUID, or null if it could not be fetched."""
    return await riot_client.get_account_by_puuid(puuid, platform_id)


@router.get(
    "/{platform_id}/by-puuid/{puuid}/mastery", response_model=List[ChampionMasteryDTO]
)
async def get_champion_mastery(
    riot_client: RiotClientDep,
    puuid: str,
    platform_id: PlatformId,
):
    """Champion masteries by PUUID (empty when none)."""
    return await riot_client.get_champion_mastery_by_puuid(puuid, platform_id)


@router.get(
    "/{platform_id}/by-puuid/{puuid}/live-game",
    response_model=Optional[CurrentGameInfoDTO],
)
async def get_live_game(
    riot_client: RiotClientDep,
    puuid: str,
    platform_id: PlatformId,
):
    """Live game for a PUUID; null when the player is not in a game."""
    return await riot_client.get_current_game_by_puuid(puuid, platform_id)


@router.get(
    "/{platform_id}/by-summoner/{summoner_id}/ranked",
    response_model=List[LeagueEntryDTO],
)
async def get_ranked_entries(
    riot_client: RiotClientDep,
    summoner_id: str,
    platform_id: PlatformId,
):
    """Ranked standings by encrypted summoner id (empty when unranked)."""
    return await riot_client.get_league_entries_by_summoner_id(summoner_id, platform_id)


@router.post(
    "/ranked/bulk",
    response_model=Dict[str, Optional[List[LeagueEntryDTO]]],
)
async def get_bulk_ranked_entries(
    riot_client: RiotClientDep,
    body: BulkRankedRequest,
):
    """
    Ranked standings for several summoners.

    Each summoner id maps to its entries, or null if that lookup failed.
    """
    results = await riot_client.get_bulk_league_entries(
        [(entry.summoner_id, entry.platform_id) for entry in body.summoner_inputs]
    )
    logger.debug(
        "Bulk ranked lookup finished",
        requested=len(body.summoner_inputs),
        failed=sum(1 for entries in results.values() if entries is None),
    )
    return results
