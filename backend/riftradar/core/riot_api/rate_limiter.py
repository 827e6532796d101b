"""
Dual-window rate limiting for outbound Riot API calls.

The gate composes two sliding-window limiters (a short and a long tier) that
share a counter store. The store is the serialization point for concurrent
callers: a hit must count and compare atomically, so two requests can never
both observe a stale count and both be admitted.
"""

import asyncio
import time
import uuid
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Optional, Protocol

import structlog
from redis import asyncio as redis_asyncio
from redis.exceptions import RedisError

from riftradar.core.config import Settings

from .constants import GLOBAL_RATE_LIMIT_IDENTIFIER, RateTier
from .errors import RateLimitError, UpstreamFailureError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class WindowResult:
    """Outcome of one increment-and-check against a window."""

    allowed: bool
    remaining: int


class CounterStore(Protocol):
    """Atomic sliding-window counter backend."""

    async def hit(self, key: str, limit: int, window: float) -> WindowResult:
        """Record one request under ``key`` if it fits in ``limit`` per ``window`` seconds."""
        ...

    async def ping(self) -> bool:
        """Return True when the backend is reachable."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        ...


# KEYS[1] = window key
# ARGV = now (seconds, float), window (seconds), limit, unique member
SLIDING_WINDOW_SCRIPT = """
local key = KEYS[1]
local now = tonumber(ARGV[1])
local window = tonumber(ARGV[2])
local limit = tonumber(ARGV[3])

redis.call('ZREMRANGEBYSCORE', key, '-inf', now - window)
local count = redis.call('ZCARD', key)
if count < limit then
    redis.call('ZADD', key, now, ARGV[4])
    redis.call('PEXPIRE', key, math.ceil(window * 1000))
    return {1, limit - count - 1}
end
return {0, 0}
"""


class RedisCounterStore:
    """Sliding-window counters kept in Redis sorted sets.

    The whole prune/count/add sequence runs as one Lua script, so Redis
    serializes concurrent hits across every gateway process.
    """

    def __init__(self, client: "redis_asyncio.Redis"):
        self._client = client
        self._script = client.register_script(SLIDING_WINDOW_SCRIPT)

    @classmethod
    def from_url(cls, url: str) -> "RedisCounterStore":
        """Build a store from a ``redis://`` URL."""
        return cls(redis_asyncio.from_url(url))

    async def hit(self, key: str, limit: int, window: float) -> WindowResult:
        now = time.time()
        member = f"{now:.6f}-{uuid.uuid4().hex}"
        allowed, remaining = await self._script(
            keys=[key], args=[now, window, limit, member]
        )
        return WindowResult(allowed=bool(int(allowed)), remaining=int(remaining))

    async def ping(self) -> bool:
        return bool(await self._client.ping())

    async def close(self) -> None:
        await self._client.aclose()


class InMemoryCounterStore:
    """Single-process sliding-window counters.

    Suitable for local development and tests; counters are not shared
    between processes. Keys whose window has fully elapsed are swept at most
    once every ``sweep_interval`` seconds, so idle subjects do not accumulate.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = 60.0,
    ):
        self._clock = clock
        self._windows: Dict[str, Deque[float]] = {}
        # key -> time at which its newest request leaves the window
        self._expires_at: Dict[str, float] = {}
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval
        self._lock = asyncio.Lock()

    def _sweep(self, now: float) -> None:
        expired = [key for key, expires_at in self._expires_at.items() if expires_at <= now]
        for key in expired:
            del self._expires_at[key]
            self._windows.pop(key, None)
        self._next_sweep = now + self._sweep_interval
        if expired:
            logger.debug("Swept idle rate limit windows", removed=len(expired))

    async def hit(self, key: str, limit: int, window: float) -> WindowResult:
        async with self._lock:
            now = self._clock()
            if now >= self._next_sweep:
                self._sweep(now)
            timestamps = self._windows.setdefault(key, deque())

            # Drop requests that fell out of the trailing window
            cutoff = now - window
            while timestamps and timestamps[0] <= cutoff:
                timestamps.popleft()

            if len(timestamps) >= limit:
                return WindowResult(allowed=False, remaining=0)

            timestamps.append(now)
            self._expires_at[key] = now + window
            return WindowResult(allowed=True, remaining=limit - len(timestamps))

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._windows.clear()
        self._expires_at.clear()

    def __len__(self) -> int:
        return len(self._windows)


class WindowLimiter:
    """One tier of the rate gate: ``requests`` per ``window`` seconds per identifier."""

    def __init__(
        self,
        store: CounterStore,
        tier: RateTier,
        requests: int,
        window: float,
        prefix: str = "ratelimit:riotapi",
    ):
        self.store = store
        self.tier = tier
        self.requests = requests
        self.window = window
        self.prefix = prefix

    def key_for(self, identifier: str) -> str:
        """Counter key for ``identifier`` in this tier."""
        return f"{self.prefix}:{self.tier.value}:{identifier}"

    async def hit(self, identifier: str) -> WindowResult:
        """Count one request for ``identifier`` and report whether it fits."""
        return await self.store.hit(self.key_for(identifier), self.requests, self.window)


class RateGate:
    """Admission check composed of a short-tier and a long-tier window."""

    def __init__(
        self,
        short: Optional[WindowLimiter],
        long: Optional[WindowLimiter],
        bypass_reason: Optional[str] = None,
    ):
        """
        Initialize the gate.

        Args:
            short: Short-tier limiter, checked first
            long: Long-tier limiter
            bypass_reason: When set, every call is admitted and the reason
                is logged once
        """
        if bypass_reason is None and (short is None or long is None):
            raise ValueError("Both tiers are required unless the gate is bypassed")

        self.short = short
        self.long = long
        self.bypass_reason = bypass_reason
        self._bypass_logged = False

    @classmethod
    def bypassed(cls, reason: str) -> "RateGate":
        """Gate that admits everything (rate limiting off or store unavailable)."""
        return cls(None, None, bypass_reason=reason)

    @property
    def enabled(self) -> bool:
        """Whether admissions are actually counted."""
        return self.bypass_reason is None

    async def admit(self, identifier: Optional[str] = None) -> None:
        """
        Admit one outbound call for ``identifier``.

        The short tier is always consulted first, so short-tier exhaustion is
        reported even when the long tier would also reject.

        Raises:
            RateLimitError: If either tier is exhausted
            UpstreamFailureError: If the counter store fails mid-check
        """
        identifier = identifier or GLOBAL_RATE_LIMIT_IDENTIFIER

        if not self.enabled:
            if not self._bypass_logged:
                self._bypass_logged = True
                logger.warning(
                    "Rate gate bypassed, admitting all Riot API calls",
                    reason=self.bypass_reason,
                )
            return

        for limiter in (self.short, self.long):
            try:
                result = await limiter.hit(identifier)
            except (RedisError, OSError) as e:
                logger.error(
                    "Error during rate limit check",
                    identifier=identifier,
                    tier=limiter.tier.value,
                    error=str(e),
                )
                raise UpstreamFailureError(
                    "An error occurred while checking API rate limits.",
                    response_data={"identifier": identifier},
                ) from e

            if not result.allowed:
                logger.warning(
                    "Riot API rate limit exceeded",
                    identifier=identifier,
                    tier=limiter.tier.value,
                    remaining=result.remaining,
                    window=limiter.window,
                )
                raise RateLimitError(
                    f"Riot API rate limit exceeded ({limiter.requests} requests per "
                    f"{limiter.window:g}s). Please try again later.",
                    tier=limiter.tier.value,
                    remaining=result.remaining,
                    identifier=identifier,
                )

    async def close(self) -> None:
        """Close the shared counter store."""
        if self.short is not None:
            await self.short.store.close()


def build_rate_gate(store: CounterStore, settings: Settings) -> RateGate:
    """Wire both tiers onto ``store`` using the configured budgets."""
    short = WindowLimiter(
        store,
        RateTier.SHORT,
        settings.rate_limit_short_requests,
        settings.rate_limit_short_window,
        prefix=settings.rate_limit_prefix,
    )
    long = WindowLimiter(
        store,
        RateTier.LONG,
        settings.rate_limit_long_requests,
        settings.rate_limit_long_window,
        prefix=settings.rate_limit_prefix,
    )
    return RateGate(short, long)


async def create_rate_gate(settings: Settings) -> RateGate:
    """
    Create the rate gate for the configured backend.

    Fails open: if rate limiting is enabled but the Redis counter store is not
    configured or cannot be reached at startup, a bypassed gate is returned.
    """
    if not settings.rate_limiting_enabled:
        return RateGate.bypassed("rate limiting disabled by configuration")

    if settings.rate_limit_backend == "memory":
        logger.info("Using in-process rate limit counters")
        return build_rate_gate(InMemoryCounterStore(), settings)

    if not settings.redis_url:
        logger.warning(
            "REDIS_URL not set, Riot API rate limiting will be disabled",
        )
        return RateGate.bypassed("counter store not configured")

    store = RedisCounterStore.from_url(settings.redis_url)
    try:
        await store.ping()
    except (RedisError, OSError) as e:
        logger.warning(
            "Redis counter store unreachable, Riot API rate limiting will be disabled",
            error=str(e),
        )
        await store.close()
        return RateGate.bypassed("counter store unreachable")

    logger.info("Rate gate connected to Redis counter store")
    return build_rate_gate(store, settings)
