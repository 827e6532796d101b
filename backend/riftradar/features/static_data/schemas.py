"""Pydantic schemas for static reference data."""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from riftradar.core.riot_api.constants import StaticDataset


class DatasetStatus(str, Enum):
    """Lifecycle of one bundle slot."""

    PENDING = "pending"
    LOADED = "loaded"
    UNAVAILABLE = "unavailable"


class ArenaAugment(BaseModel):
    """Arena augment from the Community Dragon catalog."""

    id: int
    name: Optional[str] = None
    api_name: Optional[str] = Field(None, alias="apiName")
    desc: Optional[str] = None
    tooltip: Optional[str] = None
    icon_large: Optional[str] = Field(None, alias="iconLarge")
    icon_small: Optional[str] = Field(None, alias="iconSmall")
    icon_path: Optional[str] = Field(None, alias="iconPath")
    rarity: Optional[int] = None
    data_values: Dict[str, Any] = Field(default_factory=dict, alias="dataValues")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class QueueDescriptor(BaseModel):
    """Queue id with its cleaned-up display name."""

    queue_id: int
    display_name: str


def _pending_statuses() -> Dict[StaticDataset, DatasetStatus]:
    return {dataset: DatasetStatus.PENDING for dataset in StaticDataset}


class StaticDataBundle(BaseModel):
    """
    Reference data for one page render.

    Any slot may be None. ``statuses`` tells a slot that could not be loaded
    (UNAVAILABLE) apart from one that has not been fetched yet (PENDING).
    """

    patch_version: str
    augment_channel: str
    summoner_spell_data: Optional[Dict[str, Dict[str, Any]]] = None
    rune_tree_data: Optional[List[Dict[str, Any]]] = None
    champion_data: Optional[Dict[str, Dict[str, Any]]] = None
    game_mode_map: Optional[Dict[int, str]] = None
    arena_augment_data: Optional[Dict[int, ArenaAugment]] = None
    statuses: Dict[StaticDataset, DatasetStatus] = Field(default_factory=_pending_statuses)

    def status_of(self, dataset: StaticDataset) -> DatasetStatus:
        """Status of one slot."""
        return self.statuses.get(dataset, DatasetStatus.PENDING)

    def is_available(self, dataset: StaticDataset) -> bool:
        """Whether ``dataset`` was loaded."""
        return self.status_of(dataset) is DatasetStatus.LOADED

    @property
    def unavailable_datasets(self) -> List[StaticDataset]:
        """Datasets whose fetch failed."""
        return [
            dataset
            for dataset, status in self.statuses.items()
            if status is DatasetStatus.UNAVAILABLE
        ]
