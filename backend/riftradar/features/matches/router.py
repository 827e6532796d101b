"""Match API endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Path, Query

from riftradar.core.dependencies import RiotClientDep
from riftradar.core.riot_api.constants import DEFAULT_MATCH_COUNT
from riftradar.core.riot_api.models import MatchDTO, MatchListOptions

from .schemas import MatchIdPage

router = APIRouter(prefix="/matches", tags=["matches"])

PlatformId = Annotated[
    str,
    Path(
        min_length=2,
        max_length=8,
        pattern=r"^[A-Za-z0-9]+$",
        description="Platform id, e.g. euw1",
    ),
]


@router.get("/{platform_id}/by-puuid/{puuid}/ids", response_model=MatchIdPage)
async def get_match_ids(
    riot_client: RiotClientDep,
    puuid: str,
    platform_id: PlatformId,
    start: int = Query(0, ge=0),
    count: int = Query(DEFAULT_MATCH_COUNT, ge=1, le=100),
    queue: Optional[int] = Query(None, description="Queue id filter"),
    type: Optional[str] = Query(None, description="Match type filter, e.g. ranked"),
    start_time: Optional[int] = Query(None, alias="startTime"),
    end_time: Optional[int] = Query(None, alias="endTime"),
):
    """
    One page of match ids for a player, newest first.

    Only the filters given are forwarded to Riot; a player without match
    history yields an empty page. ``next_cursor`` is the ``start`` of the
    following page and is only set when Riot returned a full page.
    """
    options = MatchListOptions(
        start=start,
        count=count,
        queue=queue,
        type=type,
        start_time=start_time,
        end_time=end_time,
    )
    match_ids = await riot_client.get_match_ids_by_puuid(puuid, platform_id, options)
    next_cursor = start + count if len(match_ids) == count else None
    return MatchIdPage(items=match_ids, next_cursor=next_cursor)


@router.get("/{platform_id}/{match_id}", response_model=MatchDTO)
async def get_match(
    riot_client: RiotClientDep,
    match_id: str,
    platform_id: PlatformId,
):
    """Match details by match id."""
    return await riot_client.get_match(match_id, platform_id)
