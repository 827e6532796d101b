"""Main FastAPI application for the RiftRadar gateway."""

from contextlib import asynccontextmanager
from typing import Any, Dict

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from riftradar.core import get_global_settings, get_riot_api_key, setup_logging
from riftradar.core.rate_limiter import limiter
from riftradar.core.riot_api import RiotAPIClient, create_rate_gate
from riftradar.core.riot_api.errors import RiotAPIError, UpstreamErrorKind
from riftradar.features.matches import matches_router
from riftradar.features.players import players_router
from riftradar.features.static_data import StaticDataAggregator, static_data_router
from riftradar.middleware import RequestLoggingMiddleware

settings = get_global_settings()
setup_logging(settings.log_level, console=settings.debug)
logger = structlog.get_logger(__name__)

HTTP_STATUS_BY_ERROR_KIND = {
    UpstreamErrorKind.CONFIGURATION_MISSING: 500,
    UpstreamErrorKind.NOT_FOUND: 404,
    UpstreamErrorKind.RATE_LIMITED: 429,
    UpstreamErrorKind.UPSTREAM_FAILURE: 502,
}


def _validate_api_key_configuration() -> None:
    """Log Riot API key configuration status."""
    api_key = get_riot_api_key()
    if not api_key:
        logger.warning(
            "RIOT_API_KEY not configured! Every Riot API call will fail until it is set.",
            hint="Get your key from https://developer.riotgames.com",
        )
    else:
        logger.info("Riot API key configured")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting up RiftRadar gateway")
    _validate_api_key_configuration()

    rate_gate = await create_rate_gate(settings)
    app.state.riot_client = RiotAPIClient(rate_gate=rate_gate, settings=settings)
    app.state.static_data_aggregator = StaticDataAggregator(settings=settings)
    yield

    logger.info("Shutting down RiftRadar gateway")
    await app.state.riot_client.close()
    await app.state.static_data_aggregator.close()
    await rate_gate.close()


async def riot_api_error_handler(request: Request, exc: RiotAPIError) -> JSONResponse:
    """Translate upstream error kinds into HTTP responses."""
    status_code = HTTP_STATUS_BY_ERROR_KIND.get(exc.kind, 502)
    log = logger.error if status_code >= 500 else logger.info
    log(
        "Riot API error surfaced to caller",
        path=request.url.path,
        kind=exc.kind.value,
        upstream_status=exc.status_code,
        error=exc.message,
    )
    body: Dict[str, Any] = {
        "detail": exc.message,
        "kind": exc.kind.value,
        "upstream_status": exc.status_code,
    }
    headers = None
    if exc.is_rate_limit():
        tier = getattr(exc, "tier", None)
        body["tier"] = tier
        window = (
            settings.rate_limit_short_window
            if tier == "short"
            else settings.rate_limit_long_window
        )
        headers = {"Retry-After": str(max(1, int(window)))}
    return JSONResponse(status_code=status_code, content=body, headers=headers)


# OpenAPI tags metadata
tags_metadata = [
    {
        "name": "players",
        "description": "Riot ID resolution, summoner, ranked, mastery and live game lookups.",
    },
    {
        "name": "matches",
        "description": "Match id listing and match details.",
    },
    {
        "name": "static-data",
        "description": "Data Dragon / Community Dragon reference data bundle.",
    },
    {
        "name": "health",
        "description": "Health check endpoint.",
    },
]

# Create FastAPI application
app = FastAPI(
    title="RiftRadar - Riot API Gateway",
    description="""
    Gateway between the RiftRadar front end and the Riot Games API.

    Outbound calls share a dual-window rate gate (short and long tier), are
    routed to the right continental or platform host, and failures are
    classified as configuration missing, not found, rate limited or upstream
    failure. Static reference data is aggregated separately and degrades per
    dataset.
    """,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure rate limiter for FastAPI app
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]
app.add_exception_handler(RiotAPIError, riot_api_error_handler)  # type: ignore[arg-type]
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(players_router, prefix="/api/v1")
app.include_router(matches_router, prefix="/api/v1")
app.include_router(static_data_router, prefix="/api/v1")


@app.get("/health", tags=["health"])
@limiter.exempt
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Reports whether the Riot API key is configured and whether the outbound
    rate gate is counting or bypassed, plus static data cache statistics.
    """
    riot_client = getattr(app.state, "riot_client", None)
    aggregator = getattr(app.state, "static_data_aggregator", None)
    return {
        "status": "healthy",
        "version": "0.1.0",
        "riot_api_key_configured": bool(get_riot_api_key()),
        "rate_gate_enabled": bool(riot_client and riot_client.rate_gate.enabled),
        "static_data_cache": aggregator.cache.get_stats() if aggregator else None,
        "debug": settings.debug,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "riftradar.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
