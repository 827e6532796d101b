"""Riot API HTTP client with rate gating, routing and error classification."""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx
import structlog
from pydantic import ValidationError

from riftradar.core.config import Settings, get_global_settings

from .constants import DECRYPTION_ERROR_MARKER, GLOBAL_RATE_LIMIT_IDENTIFIER
from .endpoints import RiotAPIEndpoints
from .errors import (
    ConfigurationMissingError,
    InvalidPuuidError,
    NotFoundError,
    RiotAPIError,
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
from .rate_limiter import RateGate

logger = structlog.get_logger(__name__)

# Upstream bodies are logged and attached to errors truncated to this size
ERROR_BODY_LIMIT = 500


class RiotAPIClient:
    """Riot API client: every call is gated, routed and classified.

    Each operation follows the same template: rate gate admission, API key
    check, route resolution, a single GET, then status classification. No
    call is retried here; retry policy belongs to the caller.
    """

    def __init__(
        self,
        rate_gate: RateGate,
        api_key: Optional[str] = None,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        per_subject_rate_keys: Optional[bool] = None,
    ):
        """
        Initialize Riot API client.

        Args:
            rate_gate: Shared admission gate for all outbound calls
            api_key: Riot API key (uses config if None)
            settings: Settings override (uses global settings if None)
            transport: Optional httpx transport (tests use httpx.MockTransport)
            per_subject_rate_keys: Key rate budgets by operation and subject
                instead of one global budget (uses config if None)
        """
        self.settings = settings or get_global_settings()
        key = api_key if api_key is not None else self.settings.riot_api_key
        self.api_key: Optional[str] = key.strip() if key and key.strip() else None
        self.rate_gate = rate_gate
        self.per_subject_rate_keys = (
            self.settings.rate_limit_per_subject
            if per_subject_rate_keys is None
            else per_subject_rate_keys
        )
        self.endpoints = RiotAPIEndpoints()

        self._transport = transport
        self.session: Optional[httpx.AsyncClient] = None
        self._session_lock = asyncio.Lock()

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start_session()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def start_session(self) -> None:
        """Start the httpx session."""
        if self.session is None or self.session.is_closed:
            async with self._session_lock:
                if self.session is None or self.session.is_closed:
                    timeout = httpx.Timeout(
                        connect=self.settings.http_connect_timeout,
                        read=self.settings.http_read_timeout,
                        write=self.settings.http_read_timeout,
                        pool=self.settings.http_pool_timeout,
                    )
                    self.session = httpx.AsyncClient(
                        headers={
                            "Accept": "application/json",
                            "User-Agent": self.settings.riot_user_agent,
                        },
                        timeout=timeout,
                        transport=self._transport,
                    )
                    logger.info(
                        "Riot API client session started",
                        api_key_prefix="[REDACTED]" if self.api_key else "None",
                        rate_gate_enabled=self.rate_gate.enabled,
                    )

    async def close(self) -> None:
        """Close the httpx session."""
        if self.session and not self.session.is_closed:
            await self.session.aclose()
            logger.info("Riot API client session closed")

    # Request template

    def _rate_key(self, operation: str, subject: str, platform_id: str) -> str:
        """Rate gate identifier for one call.

        Per-subject keys give every (operation, subject, platform) its own
        budget; otherwise all traffic shares the global identifier.
        """
        if not self.per_subject_rate_keys:
            return GLOBAL_RATE_LIMIT_IDENTIFIER
        return f"{operation}:{subject}-{platform_id.lower()}"

    async def _prepare(self, operation: str, subject: str, platform_id: str) -> None:
        """Admission then credential check, in that order."""
        await self.rate_gate.admit(self._rate_key(operation, subject, platform_id))
        if not self.api_key:
            raise ConfigurationMissingError(
                "Riot API Key not configured.",
                response_data={"operation": operation},
            )

    async def _get(
        self, operation: str, url: str, params: Optional[Dict[str, Any]] = None
    ) -> httpx.Response:
        """Single GET; transport errors become UpstreamFailureError."""
        await self.start_session()
        if self.session is None:
            raise RiotAPIError("Session not initialized")

        logger.debug("Calling Riot API", operation=operation, url=url, params=params)
        try:
            return await self.session.get(
                url, params=params, headers={"X-Riot-Token": self.api_key or ""}
            )
        except httpx.RequestError as e:
            logger.error(
                "Riot API transport error",
                operation=operation,
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamFailureError(
                f"Request to Riot API failed: {e}",
                response_data={"operation": operation},
            ) from e

    @staticmethod
    def _body_excerpt(response: httpx.Response) -> str:
        try:
            return response.text[:ERROR_BODY_LIMIT]
        except (UnicodeDecodeError, httpx.ResponseNotRead):
            return ""

    def _log_error_response(self, operation: str, response: httpx.Response, **context) -> str:
        body = self._body_excerpt(response)
        logger.error(
            "Riot API error response",
            operation=operation,
            status=response.status_code,
            body=body,
            **context,
        )
        return body

    @staticmethod
    def _failure(
        message: str, operation: str, response: httpx.Response, body: str
    ) -> UpstreamFailureError:
        return UpstreamFailureError(
            f"{message} ({response.status_code}).",
            status_code=response.status_code,
            response_data={"operation": operation, "body": body},
        )

    @staticmethod
    def _json(operation: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamFailureError(
                "Riot API returned a body that is not valid JSON.",
                status_code=response.status_code,
                response_data={"operation": operation},
            ) from e

    @staticmethod
    def _shape(operation: str, model: Any, payload: Any) -> Any:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            raise UpstreamFailureError(
                f"Unexpected response shape from Riot API: {e.error_count()} invalid field(s).",
                response_data={"operation": operation},
            ) from e

    def _shape_list(self, operation: str, model: Any, payload: Any) -> List[Any]:
        if not isinstance(payload, list):
            raise UpstreamFailureError(
                f"Expected list response, got {type(payload).__name__}",
                response_data={"operation": operation},
            )
        return [self._shape(operation, model, entry) for entry in payload]

    # Account endpoints

    async def get_puuid_by_riot_id(
        self, game_name: str, tag_line: str, platform_id: str
    ) -> str:
        """Resolve a Riot ID (gameName#tagLine) to its PUUID."""
        operation = "riotId"
        await self._prepare(operation, f"{game_name}-{tag_line}", platform_id)

        url = self.endpoints.account_by_riot_id(game_name, tag_line, platform_id)
        response = await self._get(operation, url)

        if response.status_code == 404:
            self._log_error_response(operation, response, riot_id=f"{game_name}#{tag_line}")
            raise NotFoundError(
                f"Player {game_name}#{tag_line} not found on {platform_id.lower()}.",
                status_code=404,
            )
        if not response.is_success:
            body = self._log_error_response(
                operation, response, riot_id=f"{game_name}#{tag_line}"
            )
            raise self._failure(
                f"Failed to look up player {game_name}#{tag_line}", operation, response, body
            )

        data = self._json(operation, response)
        puuid = data.get("puuid") if isinstance(data, dict) else None
        if not puuid:
            raise UpstreamFailureError(
                "PUUID not found in Riot API response.",
                status_code=response.status_code,
                response_data={"operation": operation},
            )
        return puuid

    async def get_account_by_puuid(
        self, puuid: str, platform_id: str
    ) -> Optional[AccountDTO]:
        """
        Reverse lookup of the current Riot ID for a PUUID.

        Any upstream failure yields None; the caller keeps whatever name it
        already has.
        """
        operation = "account"
        await self._prepare(operation, puuid, platform_id)

        url = self.endpoints.account_by_puuid(puuid, platform_id)
        try:
            response = await self._get(operation, url)
        except UpstreamFailureError:
            return None

        if not response.is_success:
            self._log_error_response(operation, response, puuid=puuid)
            return None

        try:
            return self._shape(operation, AccountDTO, self._json(operation, response))
        except UpstreamFailureError as e:
            logger.error("Discarding malformed account response", puuid=puuid, error=str(e))
            return None

    # Summoner endpoints

    async def get_summoner_by_puuid(self, puuid: str, platform_id: str) -> SummonerDTO:
        """Get summoner profile by PUUID."""
        operation = "summoner"
        await self._prepare(operation, puuid, platform_id)

        url = self.endpoints.summoner_by_puuid(puuid, platform_id)
        response = await self._get(operation, url)

        if not response.is_success:
            body = self._log_error_response(operation, response, puuid=puuid)
            if response.status_code == 404:
                raise NotFoundError(
                    "Summoner not found for PUUID (404).", status_code=404
                )
            if response.status_code == 400 and DECRYPTION_ERROR_MARKER in body:
                raise InvalidPuuidError(
                    "Invalid PUUID for LoL summoner data or Bad Request (400).",
                    status_code=400,
                    response_data={"operation": operation, "body": body},
                )
            raise self._failure(
                "Failed to fetch summoner data for PUUID", operation, response, body
            )

        return self._shape(operation, SummonerDTO, self._json(operation, response))

    # League endpoints

    async def get_league_entries_by_summoner_id(
        self, summoner_id: str, platform_id: str
    ) -> List[LeagueEntryDTO]:
        """Get ranked standings; unranked or unknown summoners yield []."""
        operation = "leagueEntries"
        await self._prepare(operation, summoner_id, platform_id)

        url = self.endpoints.league_entries_by_summoner_id(summoner_id, platform_id)
        response = await self._get(operation, url)

        if not response.is_success:
            body = self._log_error_response(operation, response, summoner_id=summoner_id)
            if response.status_code == 404:
                return []
            raise self._failure(
                f"Failed to fetch league entries for Summoner ID {summoner_id}",
                operation,
                response,
                body,
            )

        return self._shape_list(operation, LeagueEntryDTO, self._json(operation, response))

    async def get_bulk_league_entries(
        self, summoners: Sequence[Tuple[str, str]]
    ) -> Dict[str, Optional[List[LeagueEntryDTO]]]:
        """
        Ranked standings for many (summoner_id, platform_id) pairs at once.

        A failed lookup maps its summoner id to None without affecting the
        others.
        """

        async def fetch_one(summoner_id: str, platform_id: str):
            try:
                return summoner_id, await self.get_league_entries_by_summoner_id(
                    summoner_id, platform_id
                )
            except RiotAPIError as e:
                logger.warning(
                    "Bulk ranked lookup failed for summoner",
                    summoner_id=summoner_id,
                    platform_id=platform_id,
                    error=str(e),
                    kind=e.kind.value,
                )
                return summoner_id, None

        results = await asyncio.gather(
            *(fetch_one(summoner_id, platform_id) for summoner_id, platform_id in summoners)
        )
        return dict(results)

    # Match endpoints

    async def get_match_ids_by_puuid(
        self,
        puuid: str,
        platform_id: str,
        options: Optional[MatchListOptions] = None,
    ) -> List[str]:
        """Get match ids; a player without history yields []."""
        operation = "matchIds"
        await self._prepare(operation, puuid, platform_id)

        options = options or MatchListOptions()
        url = self.endpoints.match_ids_by_puuid(puuid, platform_id)
        response = await self._get(operation, url, params=options.to_query_params())

        if not response.is_success:
            body = self._log_error_response(operation, response, puuid=puuid)
            if response.status_code == 404:
                return []
            raise self._failure("Failed to fetch match IDs", operation, response, body)

        data = self._json(operation, response)
        if not isinstance(data, list):
            raise UpstreamFailureError(
                f"Expected list response for match ids, got {type(data).__name__}",
                response_data={"operation": operation},
            )
        return [str(match_id) for match_id in data]

    async def get_match(self, match_id: str, platform_id: str) -> MatchDTO:
        """Get match details by match ID."""
        operation = "matchDetails"
        await self._prepare(operation, match_id, platform_id)

        url = self.endpoints.match_by_id(match_id, platform_id)
        response = await self._get(operation, url)

        if not response.is_success:
            body = self._log_error_response(operation, response, match_id=match_id)
            if response.status_code == 404:
                raise NotFoundError(
                    f"Failed to fetch match details for {match_id} (404).",
                    status_code=404,
                )
            raise self._failure(
                f"Failed to fetch match details for {match_id}", operation, response, body
            )

        return self._shape(operation, MatchDTO, self._json(operation, response))

    # Champion mastery endpoints

    async def get_champion_mastery_by_puuid(
        self, puuid: str, platform_id: str
    ) -> List[ChampionMasteryDTO]:
        """Get champion masteries; no mastery data yields []."""
        operation = "champMastery"
        await self._prepare(operation, puuid, platform_id)

        url = self.endpoints.champion_mastery_by_puuid(puuid, platform_id)
        response = await self._get(operation, url)

        if not response.is_success:
            body = self._log_error_response(operation, response, puuid=puuid)
            if response.status_code == 404:
                return []
            raise self._failure(
                f"Failed to fetch champion mastery for PUUID {puuid}",
                operation,
                response,
                body,
            )

        return self._shape_list(
            operation, ChampionMasteryDTO, self._json(operation, response)
        )

    # Spectator endpoints

    async def get_current_game_by_puuid(
        self, puuid: str, platform_id: str
    ) -> Optional[CurrentGameInfoDTO]:
        """Get live game info; None means the player is not in a game."""
        operation = "spectator"
        await self._prepare(operation, puuid, platform_id)

        url = self.endpoints.active_game_by_puuid(puuid, platform_id)
        response = await self._get(operation, url)

        if response.status_code == 404:
            logger.info(
                "No active game found", puuid=puuid, platform_id=platform_id
            )
            return None

        if not response.is_success:
            body = self._log_error_response(operation, response, puuid=puuid)
            raise self._failure(
                f"Failed to fetch current game info for PUUID {puuid}",
                operation,
                response,
                body,
            )

        return self._shape(operation, CurrentGameInfoDTO, self._json(operation, response))
