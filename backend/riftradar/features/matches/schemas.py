"""Pydantic schemas for match endpoints."""

from typing import List, Optional

from pydantic import BaseModel, Field


class MatchIdPage(BaseModel):
    """One page of match ids with the offset of the next page."""

    items: List[str] = Field(default_factory=list)
    next_cursor: Optional[int] = Field(
        None, description="Start offset of the next page, null when exhausted"
    )
