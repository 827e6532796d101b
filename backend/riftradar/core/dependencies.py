"""Core dependencies for FastAPI application."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from .riot_api import RiotAPIClient


async def get_riot_client(request: Request) -> RiotAPIClient:
    """Get the shared Riot API client created at startup."""
    client = getattr(request.app.state, "riot_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Riot API client not initialized")
    return client


# Type aliases for cleaner dependency injection
RiotClientDep = Annotated[RiotAPIClient, Depends(get_riot_client)]

__all__ = ["get_riot_client", "RiotClientDep"]
