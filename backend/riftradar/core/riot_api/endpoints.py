"""Riot API endpoint definitions and routing information."""

from urllib.parse import quote

from .routing import account_region, match_region, platform_host, region_host


def _segment(value: str) -> str:
    """Percent-encode a path segment (Riot IDs may contain spaces and unicode)."""
    return quote(value, safe="")


class RiotAPIEndpoints:
    """URL builders for every Riot API operation the gateway performs."""

    # Account endpoints (continental, account routing)
    @staticmethod
    def account_by_riot_id(game_name: str, tag_line: str, platform_id: str) -> str:
        """Get account by Riot ID endpoint."""
        host = region_host(account_region(platform_id))
        return (
            f"https://{host}/riot/account/v1/accounts/by-riot-id/"
            f"{_segment(game_name)}/{_segment(tag_line)}"
        )

    @staticmethod
    def account_by_puuid(puuid: str, platform_id: str) -> str:
        """Get account by PUUID endpoint."""
        host = region_host(account_region(platform_id))
        return f"https://{host}/riot/account/v1/accounts/by-puuid/{_segment(puuid)}"

    # Summoner endpoints (platform)
    @staticmethod
    def summoner_by_puuid(puuid: str, platform_id: str) -> str:
        """Get summoner by PUUID endpoint."""
        return (
            f"https://{platform_host(platform_id)}"
            f"/lol/summoner/v4/summoners/by-puuid/{_segment(puuid)}"
        )

    # League endpoints (platform)
    @staticmethod
    def league_entries_by_summoner_id(summoner_id: str, platform_id: str) -> str:
        """Get league entries by encrypted summoner id endpoint."""
        return (
            f"https://{platform_host(platform_id)}"
            f"/lol/league/v4/entries/by-summoner/{_segment(summoner_id)}"
        )

    # Match endpoints (continental, match routing)
    @staticmethod
    def match_ids_by_puuid(puuid: str, platform_id: str) -> str:
        """Get match id list endpoint; filters travel as query parameters."""
        host = region_host(match_region(platform_id))
        return f"https://{host}/lol/match/v5/matches/by-puuid/{_segment(puuid)}/ids"

    @staticmethod
    def match_by_id(match_id: str, platform_id: str) -> str:
        """Get match by ID endpoint."""
        host = region_host(match_region(platform_id))
        return f"https://{host}/lol/match/v5/matches/{_segment(match_id)}"

    # Champion mastery endpoints (platform)
    @staticmethod
    def champion_mastery_by_puuid(puuid: str, platform_id: str) -> str:
        """Get champion masteries by PUUID endpoint."""
        return (
            f"https://{platform_host(platform_id)}"
            f"/lol/champion-mastery/v4/champion-masteries/by-puuid/{_segment(puuid)}"
        )

    # Spectator endpoints (platform)
    @staticmethod
    def active_game_by_puuid(puuid: str, platform_id: str) -> str:
        """Get live game endpoint (spectator-v5 takes the PUUID here)."""
        return (
            f"https://{platform_host(platform_id)}"
            f"/lol/spectator/v5/active-games/by-summoner/{_segment(puuid)}"
        )
