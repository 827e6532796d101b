"""Custom error classes for the Riot API gateway."""

from enum import Enum
from typing import Any, Dict, Optional


class UpstreamErrorKind(str, Enum):
    """Classification of a failed upstream call."""

    CONFIGURATION_MISSING = "configuration_missing"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_FAILURE = "upstream_failure"


class RiotAPIError(Exception):
    """Base exception for Riot API errors with status code tracking."""

    kind: UpstreamErrorKind = UpstreamErrorKind.UPSTREAM_FAILURE

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Initialize RiotAPIError.

        Args:
            message: Error message
            status_code: HTTP status code of the upstream response, if any
            response_data: Extra context (upstream body excerpt, operation, ...)
        """
        super().__init__(message)
        self.status_code: Optional[int] = status_code
        self.response_data: Dict[str, Any] = response_data or {}
        self.message: str = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code:
            return f"Riot API Error {self.status_code}: {self.message}"
        return f"Riot API Error: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON serialization."""
        return {
            "error": type(self).__name__,
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
            "response_data": self.response_data,
        }

    # Helper methods for error type checking
    def is_rate_limit(self) -> bool:
        """Check if the call was rejected by the rate gate."""
        return self.kind is UpstreamErrorKind.RATE_LIMITED

    def is_not_found(self) -> bool:
        """Check if the subject does not exist upstream."""
        return self.kind is UpstreamErrorKind.NOT_FOUND

    def is_server_error(self) -> bool:
        """Check if this is a server error (5xx)."""
        return self.status_code is not None and self.status_code >= 500


class ConfigurationMissingError(RiotAPIError):
    """No Riot API key configured - fatal for every upstream call."""

    kind = UpstreamErrorKind.CONFIGURATION_MISSING


class NotFoundError(RiotAPIError):
    """Subject does not exist upstream or has no data."""

    kind = UpstreamErrorKind.NOT_FOUND


class InvalidPuuidError(NotFoundError):
    """Summoner-v4 could not decrypt the PUUID (400 "Exception decrypting")."""


class RateLimitError(RiotAPIError):
    """Admission denied by the rate gate - caller may retry later."""

    kind = UpstreamErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str,
        tier: Optional[str] = None,
        remaining: Optional[int] = None,
        identifier: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(
            message,
            status_code=status_code,
            response_data={"tier": tier, "identifier": identifier},
        )
        self.tier: Optional[str] = tier
        self.remaining: Optional[int] = remaining
        self.identifier: Optional[str] = identifier

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"Rate Limit Error ({self.tier} window): {self.message}"


class UpstreamFailureError(RiotAPIError):
    """Any other non-2xx response or transport error."""

    kind = UpstreamErrorKind.UPSTREAM_FAILURE
