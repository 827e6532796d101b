"""
Platform to region routing for the Riot API.

Account-v1 and match-v5 are served from continental routes, while summoner,
league, champion-mastery and spectator endpoints live on a per-platform host.
The account and match tables are kept separate: OC1 resolves to the Americas
for accounts but to Europe for match history, and the SEA platforms have their
own account route while their matches are served from Asia.
"""

import re
from typing import Dict, FrozenSet

import structlog

from .constants import RIOT_API_HOST_TEMPLATE, Platform, Region

logger = structlog.get_logger(__name__)

_AMERICAS = (Platform.NA1, Platform.BR1, Platform.LA1, Platform.LA2)
_EUROPE = (Platform.EUN1, Platform.EUW1, Platform.TR1, Platform.RU)
_ASIA = (Platform.KR, Platform.JP1)
_SEA = (Platform.PH2, Platform.SG2, Platform.TH2, Platform.TW2, Platform.VN2)


def _ids(*platforms: Platform) -> FrozenSet[str]:
    return frozenset(platform.value for platform in platforms)


ACCOUNT_REGION_TABLE: Dict[Region, FrozenSet[str]] = {
    Region.AMERICAS: _ids(*_AMERICAS, Platform.OC1),
    Region.EUROPE: _ids(*_EUROPE),
    Region.ASIA: _ids(*_ASIA),
    Region.SEA: _ids(*_SEA),
}

# SEA platforms share the Asian match route.
MATCH_REGION_TABLE: Dict[Region, FrozenSet[str]] = {
    Region.AMERICAS: _ids(*_AMERICAS),
    Region.EUROPE: _ids(*_EUROPE, Platform.OC1),
    Region.ASIA: _ids(*_ASIA, *_SEA),
}

DEFAULT_REGION = Region.AMERICAS

_PLATFORM_LABEL = re.compile(r"[a-z0-9]+")


def _lookup(table: Dict[Region, FrozenSet[str]], platform_id: str, family: str) -> Region:
    normalized = (platform_id or "").strip().lower()
    for region, members in table.items():
        if normalized in members:
            return region

    logger.warning(
        "Unsupported platform id for regional routing, using default",
        platform_id=platform_id,
        api_family=family,
        default=DEFAULT_REGION.value,
    )
    return DEFAULT_REGION


def account_region(platform_id: str) -> Region:
    """Continental route for account-v1 lookups."""
    return _lookup(ACCOUNT_REGION_TABLE, platform_id, "account-v1")


def match_region(platform_id: str) -> Region:
    """Continental route for match-v5 lookups."""
    return _lookup(MATCH_REGION_TABLE, platform_id, "match-v5")


def platform_host(platform_id: str) -> str:
    """
    Host for platform-routed endpoints (summoner, league, mastery, spectator).

    Unknown alphanumeric ids are embedded as-is (lowercased). Anything that is
    not a plain alphanumeric label falls back to the default platform, so the
    result is always a riotgames.com host.
    """
    normalized = (platform_id or "").strip().lower()
    if not _PLATFORM_LABEL.fullmatch(normalized):
        logger.warning(
            "Unsupported platform id for platform routing, using default",
            platform_id=platform_id,
            default=Platform.NA1.value,
        )
        normalized = Platform.NA1.value
    return RIOT_API_HOST_TEMPLATE.format(normalized)


def region_host(region: Region) -> str:
    """Host for a continental route."""
    return RIOT_API_HOST_TEMPLATE.format(region.value)
