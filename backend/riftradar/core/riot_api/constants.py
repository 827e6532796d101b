"""Riot API constants and enum definitions."""

from enum import Enum


class Region(str, Enum):
    """Continental routes used by account-v1 and match-v5."""

    AMERICAS = "americas"
    ASIA = "asia"
    EUROPE = "europe"
    SEA = "sea"


class Platform(str, Enum):
    """Riot API platforms for platform routing."""

    BR1 = "br1"
    EUN1 = "eun1"
    EUW1 = "euw1"
    JP1 = "jp1"
    KR = "kr"
    LA1 = "la1"
    LA2 = "la2"
    NA1 = "na1"
    OC1 = "oc1"
    PH2 = "ph2"
    RU = "ru"
    SG2 = "sg2"
    TH2 = "th2"
    TR1 = "tr1"
    TW2 = "tw2"
    VN2 = "vn2"


class RateTier(str, Enum):
    """Rate gate windows, checked in declaration order."""

    SHORT = "short"
    LONG = "long"


class StaticDataset(str, Enum):
    """Reference datasets assembled by the static data aggregator."""

    SUMMONER_SPELLS = "summoner_spells"
    RUNE_TREES = "rune_trees"
    CHAMPIONS = "champions"
    QUEUE_MAP = "queue_map"
    ARENA_AUGMENTS = "arena_augments"


RIOT_API_HOST_TEMPLATE = "{}.api.riotgames.com"

# Identifier used when a caller does not supply a finer-grained rate key
GLOBAL_RATE_LIMIT_IDENTIFIER = "global_riot_api_service_user"

# Summoner-v4 answers 400 with this text when a puuid was issued for another key
DECRYPTION_ERROR_MARKER = "Exception decrypting"

DEFAULT_MATCH_COUNT = 20
