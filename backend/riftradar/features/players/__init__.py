"""Players feature module.

Exposes the Riot API player operations and the composed profile flow.
"""

from .router import router as players_router
from .service import PlayerProfileService
from .schemas import PlayerProfile, BulkRankedRequest, PuuidResponse
from .dependencies import get_player_profile_service, PlayerProfileServiceDep

__all__ = [
    # Router
    "players_router",
    # Service
    "PlayerProfileService",
    # Schemas
    "PlayerProfile",
    "BulkRankedRequest",
    "PuuidResponse",
    # Dependencies
    "get_player_profile_service",
    "PlayerProfileServiceDep",
]
