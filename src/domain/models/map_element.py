from __future__ import annotations

from dataclasses import dataclass, field

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class MapElementTags:
    """The subset of OSM tags we keep for bus stop elements.

    Any other tag present upstream is dropped on ingestion.
    """

    bench: str | None = None
    bin: str | None = None
    bus: str | None = None
    check_date_shelter: str | None = None  # OSM key: check_date:shelter
    departures_board: str | None = None
    highway: str | None = None
    lit: str | None = None
    name: str | None = None
    operator: str | None = None
    public_transport: str | None = None
    shelter: str | None = None
    tactile_paving: str | None = None
    wheelchair: str | None = None


@dataclass(frozen=True, slots=True)
class MapElement:
    """A single OSM element (node or way) as returned by Overpass."""

    kind: str  # "node" | "way" | "relation"
    id: int
    lat: float | None = None
    lon: float | None = None
    tags: MapElementTags = field(default_factory=MapElementTags)

    @property
    def name(self) -> str | None:
        return self.tags.name

    @property
    def location(self) -> GeoPoint | None:
        return GeoPoint.from_optional(self.lat, self.lon)
