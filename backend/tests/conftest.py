import httpx
import pytest

from riftradar.core.config import Settings
from riftradar.core.riot_api import InMemoryCounterStore, RiotAPIClient, build_rate_gate


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings():
    return Settings(
        riot_api_key="test-key",
        rate_limit_backend="memory",
        redis_url=None,
        _env_file=None,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def memory_gate(settings, clock):
    return build_rate_gate(InMemoryCounterStore(clock=clock), settings)


@pytest.fixture
async def make_client(settings, memory_gate):
    """Build a RiotAPIClient whose HTTP traffic goes to ``handler``."""
    clients = []

    def factory(handler, **kwargs):
        kwargs.setdefault("rate_gate", memory_gate)
        kwargs.setdefault("settings", settings)
        client = RiotAPIClient(transport=httpx.MockTransport(handler), **kwargs)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        await client.close()


@pytest.fixture
def summoner_payload():
    return {
        "id": "enc-summoner-id",
        "accountId": "enc-account-id",
        "puuid": "test-puuid-123",
        "profileIconId": 4568,
        "revisionDate": 1717000000000,
        "summonerLevel": 312,
    }


@pytest.fixture
def league_entry_payload():
    return {
        "leagueId": "league-1",
        "summonerId": "enc-summoner-id",
        "queueType": "RANKED_SOLO_5x5",
        "tier": "GOLD",
        "rank": "II",
        "leaguePoints": 45,
        "wins": 30,
        "losses": 20,
        "hotStreak": True,
    }


@pytest.fixture
def mastery_payload():
    return [
        {
            "puuid": "test-puuid-123",
            "championId": 238,
            "championLevel": 7,
            "championPoints": 250000,
            "lastPlayTime": 1717000000000,
        }
    ]


@pytest.fixture
def live_game_payload():
    return {
        "gameId": 6612345678,
        "gameType": "MATCHED",
        "gameStartTime": 1717000000000,
        "mapId": 11,
        "gameLength": 600,
        "platformId": "EUW1",
        "gameMode": "CLASSIC",
        "gameQueueConfigId": 420,
        "participants": [],
        "bannedChampions": [],
    }


@pytest.fixture
def match_payload():
    return {
        "metadata": {
            "matchId": "EUW1_1234567890",
            "dataVersion": "2",
            "participants": ["test-puuid-123"],
        },
        "info": {
            "gameCreation": 1717000000000,
            "gameDuration": 1800,
            "queueId": 420,
            "mapId": 11,
            "gameVersion": "14.10.585.9001",
            "gameMode": "CLASSIC",
            "platformId": "EUW1",
            "participants": [
                {
                    "puuid": "test-puuid-123",
                    "teamId": 100,
                    "win": True,
                    "championId": 238,
                    "championName": "Zed",
                    "kills": 12,
                    "deaths": 2,
                    "assists": 6,
                }
            ],
        },
    }
