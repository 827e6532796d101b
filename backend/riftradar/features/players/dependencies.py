"""Dependencies for the players feature."""

from typing import Annotated

from fastapi import Depends

from riftradar.core.dependencies import get_riot_client
from riftradar.core.riot_api.client import RiotAPIClient

from .service import PlayerProfileService


async def get_player_profile_service(
    riot_client: Annotated[RiotAPIClient, Depends(get_riot_client)],
) -> PlayerProfileService:
    """Get player profile service instance.

    :param riot_client: Riot API client
    :returns: Player profile service
    """
    return PlayerProfileService(riot_client)


# Type aliases for cleaner dependency injection
PlayerProfileServiceDep = Annotated[
    PlayerProfileService, Depends(get_player_profile_service)
]

__all__ = ["get_player_profile_service", "PlayerProfileServiceDep"]
