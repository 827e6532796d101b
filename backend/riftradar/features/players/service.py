"""
Player profile service.

Composes the upstream operations that make up a profile page: Riot ID
resolution, current display name, summoner profile, ranked standings,
champion mastery and the live game.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, List

import structlog

from riftradar.core.riot_api.models import LeagueEntryDTO

from .schemas import PlayerProfile

if TYPE_CHECKING:
    from riftradar.core.riot_api.client import RiotAPIClient

logger = structlog.get_logger(__name__)


class PlayerProfileService:
    """Builds PlayerProfile objects on top of the Riot API client."""

    def __init__(self, riot_api_client: "RiotAPIClient"):
        """
        Initialize service with Riot API client.

        :param riot_api_client: Low-level Riot API client
        """
        self._client = riot_api_client

    async def _ranked_entries(self, summoner_id: str | None, platform_id: str) -> List[LeagueEntryDTO]:
        if not summoner_id:
            # Newer summoner-v4 payloads may omit the encrypted summoner id
            return []
        return await self._client.get_league_entries_by_summoner_id(summoner_id, platform_id)

    async def get_profile(
        self, game_name: str, tag_line: str, platform_id: str
    ) -> PlayerProfile:
        """
        Fetch the full profile for a Riot ID.

        Args:
            game_name: Player's game name (Riot ID part 1)
            tag_line: Player's tag line (Riot ID part 2)
            platform_id: Platform code (e.g., "euw1")

        Returns:
            PlayerProfile; ``live_game`` is None when the player is not in a game

        Raises:
            NotFoundError: If the Riot ID or summoner does not exist
            RateLimitError: If the rate gate rejects any call
            RiotAPIError: For any other upstream failure
        """
        platform_id = platform_id.lower()

        puuid = await self._client.get_puuid_by_riot_id(game_name, tag_line, platform_id)

        # The searched name may be stale; prefer the current Riot ID when known
        account = await self._client.get_account_by_puuid(puuid, platform_id)
        if account is not None and account.game_name and account.tag_line:
            if (account.game_name, account.tag_line) != (game_name, tag_line):
                logger.info(
                    "Riot ID changed for PUUID",
                    puuid=puuid,
                    searched=f"{game_name}#{tag_line}",
                    current=account.riot_id,
                )
            game_name, tag_line = account.game_name, account.tag_line
        else:
            logger.warning(
                "Could not verify current Riot ID, using searched name",
                puuid=puuid,
            )

        summoner = await self._client.get_summoner_by_puuid(puuid, platform_id)

        ranked_entries, masteries, live_game = await asyncio.gather(
            self._ranked_entries(summoner.id, platform_id),
            self._client.get_champion_mastery_by_puuid(puuid, platform_id),
            self._client.get_current_game_by_puuid(puuid, platform_id),
        )

        logger.info(
            "Player profile assembled",
            puuid=puuid,
            platform_id=platform_id,
            ranked_queues=len(ranked_entries),
            masteries=len(masteries),
            in_game=live_game is not None,
        )

        return PlayerProfile(
            puuid=puuid,
            game_name=game_name,
            tag_line=tag_line,
            platform_id=platform_id,
            summoner=summoner,
            ranked_entries=ranked_entries,
            champion_masteries=masteries,
            live_game=live_game,
        )
