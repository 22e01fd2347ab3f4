"""pydantic models shared by more than one adapter.

Upstream payloads (VVR stop search, Overpass JSON) double as the cache
layout, and the matches document is both the `/matches` response and the
JSON file written by the result sink.
"""

from __future__ import annotations

from dataclasses import fields
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models import (
    MapElement,
    MapElementTags,
    MapSnapshot,
    MatchedGroup,
    ReconciliationResult,
    StopRecord,
)

OSM_TAG_KEYS = {"check_date_shelter": "check_date:shelter"}


class StopRecordModel(BaseModel):
    """Wire/cache shape of one stop search hit."""

    id: str
    value: str
    label: str = ""

    def to_domain(self) -> StopRecord:
        return StopRecord(id=self.id, value=self.value, label=self.label)

    @classmethod
    def from_domain(cls, stop: StopRecord) -> "StopRecordModel":
        return cls(id=stop.id, value=stop.value, label=stop.label)


class OverpassTagsModel(BaseModel):
    # Unknown OSM tags are ignored (pydantic default).
    model_config = ConfigDict(populate_by_name=True)

    bench: str | None = None
    bin: str | None = None
    bus: str | None = None
    check_date_shelter: str | None = Field(default=None, alias="check_date:shelter")
    departures_board: str | None = None
    highway: str | None = None
    lit: str | None = None
    name: str | None = None
    operator: str | None = None
    public_transport: str | None = None
    shelter: str | None = None
    tactile_paving: str | None = None
    wheelchair: str | None = None


class OverpassElementModel(BaseModel):
    type: str
    id: int
    # Ways carry no coordinates with plain `out;`.
    lat: float | None = None
    lon: float | None = None
    tags: OverpassTagsModel = Field(default_factory=OverpassTagsModel)


class Osm3sModel(BaseModel):
    timestamp_osm_base: datetime | None = None
    timestamp_areas_base: datetime | None = None
    copyright: str = ""


class OverpassResponseModel(BaseModel):
    """Overpass API JSON output; also used verbatim as the map cache layout."""

    version: float = 0.0
    generator: str = ""
    osm3s: Osm3sModel = Field(default_factory=Osm3sModel)
    elements: list[OverpassElementModel] = []

    def to_domain(self) -> MapSnapshot:
        return MapSnapshot(
            elements=tuple(
                MapElement(
                    kind=e.type,
                    id=e.id,
                    lat=e.lat,
                    lon=e.lon,
                    tags=MapElementTags(**e.tags.model_dump(by_alias=False)),
                )
                for e in self.elements
            ),
            generator=self.generator,
            version=self.version,
            copyright=self.osm3s.copyright,
            timestamp_osm_base=self.osm3s.timestamp_osm_base,
            timestamp_areas_base=self.osm3s.timestamp_areas_base,
        )

    @classmethod
    def from_domain(cls, snapshot: MapSnapshot) -> "OverpassResponseModel":
        return cls(
            version=snapshot.version,
            generator=snapshot.generator,
            osm3s=Osm3sModel(
                timestamp_osm_base=snapshot.timestamp_osm_base,
                timestamp_areas_base=snapshot.timestamp_areas_base,
                copyright=snapshot.copyright,
            ),
            elements=[
                OverpassElementModel(
                    type=e.kind,
                    id=e.id,
                    lat=e.lat,
                    lon=e.lon,
                    tags=OverpassTagsModel(
                        **{f.name: getattr(e.tags, f.name) for f in fields(e.tags)}
                    ),
                )
                for e in snapshot.elements
            ],
        )


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class MapElementSchema(BaseModel):
    type: str
    id: int
    location: GeoPointSchema | None = None
    tags: dict[str, str] = {}


class MatchedGroupSchema(BaseModel):
    name: str
    transit_id: str
    locality: str
    is_orphan: bool
    elements: list[MapElementSchema] = []


class MatchesResponseSchema(BaseModel):
    generated_at: datetime
    comparisons: int
    matched_count: int
    orphan_count: int
    groups: list[MatchedGroupSchema]


def map_element_to_schema(element: MapElement) -> MapElementSchema:
    tags: dict[str, str] = {}
    for f in fields(element.tags):
        value = getattr(element.tags, f.name)
        if value is not None:
            tags[OSM_TAG_KEYS.get(f.name, f.name)] = value

    point = element.location
    return MapElementSchema(
        type=element.kind,
        id=element.id,
        location=None if point is None else GeoPointSchema(lat=point.lat, lon=point.lon),
        tags=tags,
    )


def matched_group_to_schema(group: MatchedGroup) -> MatchedGroupSchema:
    return MatchedGroupSchema(
        name=group.name,
        transit_id=group.transit_id,
        locality=group.locality,
        is_orphan=group.is_orphan,
        elements=[map_element_to_schema(e) for e in group.elements],
    )


def matches_document(
    result: ReconciliationResult,
    *,
    generated_at: datetime,
    include_orphans: bool = True,
) -> MatchesResponseSchema:
    groups = result.groups if include_orphans else result.matched
    return MatchesResponseSchema(
        generated_at=generated_at,
        comparisons=result.comparisons,
        matched_count=len(result.matched),
        orphan_count=len(result.orphans),
        groups=[matched_group_to_schema(g) for g in groups],
    )
