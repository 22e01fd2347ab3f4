from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from src.adapters.schemas import OverpassResponseModel, StopRecordModel
from src.app.ports.output import DatasetKind
from src.domain.models import CitySnapshot, MapSnapshot, PerCityDataset

T = TypeVar("T")


class CitySnapshotModel(BaseModel):
    # Field names follow the existing vvr.json files.
    model_config = ConfigDict(populate_by_name=True)

    search_word: str = Field(alias="SearchWord")
    result_timestamp: datetime = Field(alias="ResultTimeStamp")
    result: list[StopRecordModel] | None = Field(default=None, alias="Result")


class StopsCacheModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    city_results: list[CitySnapshotModel] | None = Field(
        default=None, alias="CityResults"
    )


class SnapshotCodec(ABC, Generic[T]):
    """Serialization of one dataset kind. `decode` raises ValueError on bad input."""

    @abstractmethod
    def empty(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def encode(self, snapshot: T) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def decode(self, data: bytes) -> T:
        raise NotImplementedError


class StopsCodec(SnapshotCodec[PerCityDataset]):
    def empty(self) -> PerCityDataset:
        return PerCityDataset.empty()

    def encode(self, snapshot: PerCityDataset) -> bytes:
        model = StopsCacheModel(
            city_results=[
                CitySnapshotModel(
                    search_word=city.locality,
                    result_timestamp=city.fetched_at,
                    result=[StopRecordModel.from_domain(s) for s in city.stops],
                )
                for city in snapshot
            ]
        )
        return model.model_dump_json(by_alias=True, indent=2).encode("utf-8")

    def decode(self, data: bytes) -> PerCityDataset:
        model = StopsCacheModel.model_validate_json(data)
        # PerCityDataset raises ValueError on duplicate localities.
        return PerCityDataset.from_snapshots(
            CitySnapshot(
                locality=city.search_word,
                fetched_at=city.result_timestamp,
                stops=tuple(s.to_domain() for s in city.result or ()),
            )
            for city in model.city_results or ()
        )


class MapCodec(SnapshotCodec[MapSnapshot]):
    def empty(self) -> MapSnapshot:
        return MapSnapshot.empty()

    def encode(self, snapshot: MapSnapshot) -> bytes:
        model = OverpassResponseModel.from_domain(snapshot)
        return model.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")

    def decode(self, data: bytes) -> MapSnapshot:
        return OverpassResponseModel.model_validate_json(data).to_domain()


CODECS: dict[DatasetKind, SnapshotCodec[Any]] = {
    DatasetKind.STOPS: StopsCodec(),
    DatasetKind.MAP: MapCodec(),
}


def codec_for(kind: DatasetKind) -> SnapshotCodec[Any]:
    return CODECS[kind]
