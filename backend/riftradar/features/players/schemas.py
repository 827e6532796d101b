"""Pydantic schemas for player endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from riftradar.core.riot_api.models import (
    ChampionMasteryDTO,
    CurrentGameInfoDTO,
    LeagueEntryDTO,
    SummonerDTO,
)


class PuuidResponse(BaseModel):
    """Riot ID to PUUID resolution result."""

    puuid: str
    game_name: str
    tag_line: str
    platform_id: str


class SummonerInput(BaseModel):
    """One summoner in a bulk ranked lookup."""

    summoner_id: str = Field(..., min_length=1, alias="summonerId")
    platform_id: str = Field(
        ..., min_length=2, max_length=8, pattern=r"^[A-Za-z0-9]+$", alias="platformId"
    )

    model_config = ConfigDict(populate_by_name=True)


class BulkRankedRequest(BaseModel):
    """Request body for bulk ranked standings."""

    summoner_inputs: List[SummonerInput] = Field(..., min_length=1, alias="summonerInputs")

    model_config = ConfigDict(populate_by_name=True)


class PlayerProfile(BaseModel):
    """Everything the profile page needs from the Riot API for one player."""

    puuid: str
    game_name: str
    tag_line: str
    platform_id: str
    summoner: SummonerDTO
    ranked_entries: List[LeagueEntryDTO] = Field(default_factory=list)
    champion_masteries: List[ChampionMasteryDTO] = Field(default_factory=list)
    live_game: Optional[CurrentGameInfoDTO] = None

    @property
    def in_game(self) -> bool:
        """Whether the player is currently in a live game."""
        return self.live_game is not None
