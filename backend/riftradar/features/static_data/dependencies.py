"""Dependencies for the static data feature."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from .aggregator import StaticDataAggregator


async def get_static_data_aggregator(request: Request) -> StaticDataAggregator:
    """Get the shared aggregator created at startup.

    :param request: Incoming request
    :returns: Static data aggregator
    """
    aggregator = getattr(request.app.state, "static_data_aggregator", None)
    if aggregator is None:
        raise HTTPException(status_code=503, detail="Static data aggregator not initialized")
    return aggregator


StaticDataAggregatorDep = Annotated[
    StaticDataAggregator, Depends(get_static_data_aggregator)
]

__all__ = ["get_static_data_aggregator", "StaticDataAggregatorDep"]
