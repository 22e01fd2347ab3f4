from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Iterator

from .map_element import MapElement
from .stop import StopRecord


@dataclass(frozen=True, slots=True)
class CitySnapshot:
    """Cached stop search result for one locality.

    `fetched_at` is the time of the last successful fetch (timezone-aware, UTC).
    """

    locality: str
    fetched_at: datetime
    stops: tuple[StopRecord, ...] = ()


@dataclass(frozen=True, slots=True)
class PerCityDataset:
    """All cached city snapshots, at most one per locality, in insertion order."""

    snapshots: tuple[CitySnapshot, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for snap in self.snapshots:
            if snap.locality in seen:
                raise ValueError(f"Duplicate snapshot for locality: {snap.locality}")
            seen.add(snap.locality)

    @classmethod
    def empty(cls) -> "PerCityDataset":
        return cls()

    @classmethod
    def from_snapshots(cls, snapshots: Iterable[CitySnapshot]) -> "PerCityDataset":
        return cls(snapshots=tuple(snapshots))

    @property
    def localities(self) -> tuple[str, ...]:
        return tuple(s.locality for s in self.snapshots)

    def get(self, locality: str) -> CitySnapshot | None:
        for snap in self.snapshots:
            if snap.locality == locality:
                return snap
        return None

    def __iter__(self) -> Iterator[CitySnapshot]:
        return iter(self.snapshots)

    def __len__(self) -> int:
        return len(self.snapshots)


@dataclass(frozen=True, slots=True)
class MapSnapshot:
    """Cached Overpass result plus the provenance Overpass reports for it."""

    elements: tuple[MapElement, ...] = ()
    generator: str = ""
    version: float = 0.0
    copyright: str = ""
    timestamp_osm_base: datetime | None = None
    timestamp_areas_base: datetime | None = None

    @classmethod
    def empty(cls) -> "MapSnapshot":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.elements and self.timestamp_osm_base is None
