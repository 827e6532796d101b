"""Pydantic models for Riot API response data."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_MATCH_COUNT


class AccountDTO(BaseModel):
    """Riot Account information."""

    puuid: str
    game_name: Optional[str] = Field(None, alias="gameName")
    tag_line: Optional[str] = Field(None, alias="tagLine")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def riot_id(self) -> Optional[str]:
        """``gameName#tagLine`` when both parts are known."""
        if self.game_name and self.tag_line:
            return f"{self.game_name}#{self.tag_line}"
        return None


class SummonerDTO(BaseModel):
    """League of Legends Summoner information."""

    id: Optional[str] = None
    account_id: Optional[str] = Field(None, alias="accountId")
    puuid: str
    name: Optional[str] = None
    profile_icon_id: int = Field(..., alias="profileIconId")
    revision_date: Optional[int] = Field(None, alias="revisionDate")
    summoner_level: int = Field(..., alias="summonerLevel")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def level(self) -> int:
        """Alias used by the profile views."""
        return self.summoner_level


class MiniSeriesDTO(BaseModel):
    """Promotion series progress."""

    losses: int
    progress: str
    target: int
    wins: int


class LeagueEntryDTO(BaseModel):
    """League entry information."""

    league_id: Optional[str] = Field(None, alias="leagueId")
    summoner_id: Optional[str] = Field(None, alias="summonerId")
    summoner_name: Optional[str] = Field(None, alias="summonerName")
    puuid: Optional[str] = None
    queue_type: str = Field(..., alias="queueType")
    tier: str
    rank: str
    league_points: int = Field(..., alias="leaguePoints")
    wins: int
    losses: int
    veteran: bool = False
    inactive: bool = False
    fresh_blood: bool = Field(False, alias="freshBlood")
    hot_streak: bool = Field(False, alias="hotStreak")
    mini_series: Optional[MiniSeriesDTO] = Field(None, alias="miniSeries")

    model_config = ConfigDict(populate_by_name=True)


class ChampionMasteryDTO(BaseModel):
    """Champion mastery entry."""

    puuid: Optional[str] = None
    champion_id: int = Field(..., alias="championId")
    champion_level: int = Field(..., alias="championLevel")
    champion_points: int = Field(..., alias="championPoints")
    last_play_time: Optional[int] = Field(None, alias="lastPlayTime")
    champion_points_since_last_level: Optional[int] = Field(
        None, alias="championPointsSinceLastLevel"
    )
    champion_points_until_next_level: Optional[int] = Field(
        None, alias="championPointsUntilNextLevel"
    )
    chest_granted: Optional[bool] = Field(None, alias="chestGranted")
    tokens_earned: Optional[int] = Field(None, alias="tokensEarned")
    summoner_id: Optional[str] = Field(None, alias="summonerId")

    model_config = ConfigDict(populate_by_name=True)


class MatchListOptions(BaseModel):
    """Filters and paging for the match id listing.

    Optional filters that are left unset are omitted from the request.
    """

    start_time: Optional[int] = Field(None, alias="startTime")
    end_time: Optional[int] = Field(None, alias="endTime")
    queue: Optional[int] = None
    type: Optional[str] = None
    start: int = Field(0, ge=0)
    count: int = Field(DEFAULT_MATCH_COUNT, ge=1, le=100)

    model_config = ConfigDict(populate_by_name=True)

    def to_query_params(self) -> Dict[str, Any]:
        """Query parameters in Riot's camelCase naming."""
        params: Dict[str, Any] = {}
        if self.start_time is not None:
            params["startTime"] = self.start_time
        if self.end_time is not None:
            params["endTime"] = self.end_time
        if self.queue is not None:
            params["queue"] = self.queue
        if self.type is not None:
            params["type"] = self.type
        params["start"] = self.start
        params["count"] = self.count
        return params


# Match-v5 carries a large and frequently changing schema. The fields below
# are the ones the application reads; everything else (challenges, perks,
# pings, missions, ...) is kept as extra attributes.


class ParticipantDTO(BaseModel):
    """Match participant information."""

    puuid: str
    summoner_name: Optional[str] = Field(None, alias="summonerName")
    summoner_id: Optional[str] = Field(None, alias="summonerId")
    riot_id_game_name: Optional[str] = Field(None, alias="riotIdGameName")
    riot_id_tagline: Optional[str] = Field(None, alias="riotIdTagline")
    team_id: int = Field(..., alias="teamId")
    win: bool
    champion_id: int = Field(..., alias="championId")
    champion_name: Optional[str] = Field(None, alias="championName")
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    champ_level: Optional[int] = Field(None, alias="champLevel")
    individual_position: Optional[str] = Field(None, alias="individualPosition")
    team_position: Optional[str] = Field(None, alias="teamPosition")
    challenges: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class MatchInfoDTO(BaseModel):
    """Match information."""

    game_creation: Optional[int] = Field(None, alias="gameCreation")
    game_duration: int = Field(..., alias="gameDuration")
    queue_id: int = Field(..., alias="queueId")
    map_id: Optional[int] = Field(None, alias="mapId")
    game_version: Optional[str] = Field(None, alias="gameVersion")
    game_mode: Optional[str] = Field(None, alias="gameMode")
    game_type: Optional[str] = Field(None, alias="gameType")
    platform_id: Optional[str] = Field(None, alias="platformId")
    participants: List[ParticipantDTO]

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class MatchMetadataDTO(BaseModel):
    """Match metadata."""

    match_id: str = Field(..., alias="matchId")
    participants: List[str]

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class MatchDTO(BaseModel):
    """Complete match data."""

    metadata: MatchMetadataDTO
    info: MatchInfoDTO

    @property
    def match_id(self) -> str:
        """Get match ID from metadata."""
        return self.metadata.match_id

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class BannedChampionDTO(BaseModel):
    """Champion banned in a live game."""

    pick_turn: int = Field(..., alias="pickTurn")
    champion_id: int = Field(..., alias="championId")
    team_id: int = Field(..., alias="teamId")

    model_config = ConfigDict(populate_by_name=True)


class CurrentGameParticipantDTO(BaseModel):
    """Participant of a live game."""

    puuid: Optional[str] = None
    champion_id: int = Field(..., alias="championId")
    team_id: int = Field(..., alias="teamId")
    spell1_id: Optional[int] = Field(None, alias="spell1Id")
    spell2_id: Optional[int] = Field(None, alias="spell2Id")
    profile_icon_id: Optional[int] = Field(None, alias="profileIconId")
    riot_id: Optional[str] = Field(None, alias="riotId")
    bot: bool = False

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class CurrentGameInfoDTO(BaseModel):
    """Spectator-v5 live game information."""

    game_id: int = Field(..., alias="gameId")
    game_type: Optional[str] = Field(None, alias="gameType")
    game_start_time: Optional[int] = Field(None, alias="gameStartTime")
    map_id: Optional[int] = Field(None, alias="mapId")
    game_length: Optional[int] = Field(None, alias="gameLength")
    platform_id: Optional[str] = Field(None, alias="platformId")
    game_mode: Optional[str] = Field(None, alias="gameMode")
    game_queue_config_id: Optional[int] = Field(None, alias="gameQueueConfigId")
    banned_champions: List[BannedChampionDTO] = Field(
        default_factory=list, alias="bannedChampions"
    )
    participants: List[CurrentGameParticipantDTO] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True, extra="allow")
