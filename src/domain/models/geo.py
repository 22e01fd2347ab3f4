from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """WGS84 position of a map element."""

    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError(f"Latitude out of range: {self.lat}")
        if not -180.0 <= self.lon <= 180.0:
            raise ValueError(f"Longitude out of range: {self.lon}")

    @classmethod
    def from_optional(cls, lat: float | None, lon: float | None) -> GeoPoint | None:
        # Overpass only reports coordinates for nodes when queried with plain `out;`.
        if lat is None or lon is None:
            return None
        return cls(lat=float(lat), lon=float(lon))
