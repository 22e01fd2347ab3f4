from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from src.domain.models import MapSnapshot, PerCityDataset


class DatasetKind(str, Enum):
    STOPS = "stops"
    MAP = "map"


class ISnapshotStore(ABC):
    """Durable cache for the last good snapshot of each dataset kind.

    Loading a kind that was never stored returns its empty value. Unreadable
    payloads raise CacheCorrupt, failed writes raise CacheWriteFailed.
    """

    @abstractmethod
    def load_stops(self) -> PerCityDataset:
        raise NotImplementedError

    @abstractmethod
    def store_stops(self, dataset: PerCityDataset) -> None:
        raise NotImplementedError

    @abstractmethod
    def load_map(self) -> MapSnapshot:
        raise NotImplementedError

    @abstractmethod
    def store_map(self, snapshot: MapSnapshot) -> None:
        raise NotImplementedError

    @abstractmethod
    def location(self, kind: DatasetKind) -> str:
        """Human readable address of the persisted resource (for logs/errors)."""
