"""Static reference data endpoints."""

from fastapi import APIRouter

from .dependencies import StaticDataAggregatorDep
from .schemas import StaticDataBundle

router = APIRouter(prefix="/static-data", tags=["static-data"])


@router.get("", response_model=StaticDataBundle)
async def get_static_data_bundle(aggregator: StaticDataAggregatorDep) -> StaticDataBundle:
    """
    Reference data bundle for the current patch.

    Slots that could not be loaded are null and marked ``unavailable`` in
    ``statuses``; the response is still a 200.
    """
    return await aggregator.get_bundle()
