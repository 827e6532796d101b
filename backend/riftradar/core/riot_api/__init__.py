"""
Riot API gateway package for League of Legends API integration.

This package provides the outbound side of the application: the dual-window
rate gate, platform/region routing, and the typed HTTP client with status-code
driven error classification.
"""

from .client import RiotAPIClient
from .constants import Platform, RateTier, Region
from .endpoints import RiotAPIEndpoints
from .errors import (
    ConfigurationMissingError,
    InvalidPuuidError,
    NotFoundError,
    RateLimitError,
    RiotAPIError,
    UpstreamErrorKind,
    UpstreamFailureError,
)
from .models import (
    AccountDTO,
    ChampionMasteryDTO,
    CurrentGameInfoDTO,
    LeagueEntryDTO,
    MatchDTO,
    MatchListOptions,
    SummonerDTO,
)
from .rate_limiter import (
    CounterStore,
    InMemoryCounterStore,
    RateGate,
    RedisCounterStore,
    WindowLimiter,
    WindowResult,
    build_rate_gate,
    create_rate_gate,
)
from .routing import account_region, match_region, platform_host

__all__ = [
    "RiotAPIClient",
    "RiotAPIEndpoints",
    "Platform",
    "RateTier",
    "Region",
    "RiotAPIError",
    "UpstreamErrorKind",
    "ConfigurationMissingError",
    "NotFoundError",
    "InvalidPuuidError",
    "RateLimitError",
    "UpstreamFailureError",
    "AccountDTO",
    "SummonerDTO",
    "LeagueEntryDTO",
    "ChampionMasteryDTO",
    "MatchDTO",
    "MatchListOptions",
    "CurrentGameInfoDTO",
    "CounterStore",
    "InMemoryCounterStore",
    "RedisCounterStore",
    "WindowLimiter",
    "WindowResult",
    "RateGate",
    "build_rate_gate",
    "create_rate_gate",
    "account_region",
    "match_region",
    "platform_host",
]
