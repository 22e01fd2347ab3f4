from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from src.adapters.persistence import LocalSnapshotStore
from src.app.ports.output import DatasetKind
from src.domain.exceptions import CacheCorrupt, CacheWriteFailed
from src.domain.models import (
    CitySnapshot,
    MapElement,
    MapElementTags,
    MapSnapshot,
    PerCityDataset,
    StopRecord,
)
from tests.unit.fakes import NOW


@pytest.mark.parametrize(
    "dataset",
    [
        PerCityDataset.empty(),
        PerCityDataset(snapshots=(CitySnapshot(locality="Parow", fetched_at=NOW),)),
        PerCityDataset(
            snapshots=(
                CitySnapshot(
                    locality="Altefähr",
                    fetched_at=NOW - timedelta(hours=5, microseconds=17),
                    stops=(
                        StopRecord(
                            id="A=1@O=Altefähr, Fähre",
                            value="Altefähr, Fähre",
                            label="Fähre",
                        ),
                        StopRecord(id="A=1@O=Altefähr, Kirche", value="Altefähr, Kirche"),
                    ),
                ),
                CitySnapshot(locality="Prohn", fetched_at=NOW, stops=()),
            )
        ),
    ],
)
def test_stops_round_trip(tmp_path: Path, dataset: PerCityDataset) -> None:
    store = LocalSnapshotStore(root=tmp_path / "cache")

    store.store_stops(dataset)

    assert store.load_stops() == dataset


def test_map_round_trip_keeps_tags_and_provenance(tmp_path: Path) -> None:
    snapshot = MapSnapshot(
        elements=(
            MapElement(
                kind="node",
                id=2981928311,
                lat=54.3158,
                lon=13.0922,
                tags=MapElementTags(
                    name="Stralsund, Hauptbahnhof",
                    highway="bus_stop",
                    check_date_shelter="2023-05-01",
                    wheelchair="yes",
                ),
            ),
            MapElement(kind="way", id=12),
        ),
        generator="Overpass API 0.7.62",
        version=0.6,
        copyright="The data included in this document is from www.openstreetmap.org.",
        timestamp_osm_base=datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc),
        timestamp_areas_base=datetime(2026, 2, 28, 23, 0, tzinfo=timezone.utc),
    )
    store = LocalSnapshotStore(root=tmp_path)

    store.store_map(snapshot)

    assert store.load_map() == snapshot
    raw = json.loads((tmp_path / "overpass.json").read_text(encoding="utf-8"))
    assert raw["elements"][0]["tags"]["check_date:shelter"] == "2023-05-01"
    assert "lat" not in raw["elements"][1]


def test_missing_files_load_as_empty(tmp_path: Path) -> None:
    store = LocalSnapshotStore(root=tmp_path / "never-created")

    assert store.load_stops() == PerCityDataset.empty()
    assert store.load_map() == MapSnapshot.empty()


def test_store_creates_cache_directory_and_leaves_no_temp_file(tmp_path: Path) -> None:
    root = tmp_path / "a" / "b"
    store = LocalSnapshotStore(root=root)

    store.store_stops(PerCityDataset.empty())

    assert sorted(p.name for p in root.iterdir()) == ["vvr.json"]


def test_corrupt_file_raises_cache_corrupt(tmp_path: Path) -> None:
    (tmp_path / "vvr.json").write_text("{not json", encoding="utf-8")
    store = LocalSnapshotStore(root=tmp_path)

    with pytest.raises(CacheCorrupt) as excinfo:
        store.load_stops()

    assert excinfo.value.kind == DatasetKind.STOPS.value


def test_duplicate_locality_in_file_is_corrupt(tmp_path: Path) -> None:
    entry = {"SearchWord": "Parow", "ResultTimeStamp": NOW.isoformat(), "Result": []}
    (tmp_path / "vvr.json").write_text(
        json.dumps({"CityResults": [entry, entry]}), encoding="utf-8"
    )

    with pytest.raises(CacheCorrupt):
        LocalSnapshotStore(root=tmp_path).load_stops()


def test_reads_existing_vvr_cache_layout(tmp_path: Path) -> None:
    (tmp_path / "vvr.json").write_text(
        json.dumps(
            {
                "CityResults": [
                    {
                        "SearchWord": "Kramerhof",
                        "ResultTimeStamp": "2026-03-01T10:15:00+01:00",
                        "Result": [{"id": "k1", "value": "Kramerhof, Ort", "label": "Ort"}],
                    },
                    {
                        "SearchWord": "Prohn",
                        "ResultTimeStamp": "2026-03-01T10:15:01+01:00",
                        "Result": None,
                    },
                ]
            }
        ),
        encoding="utf-8",
    )

    dataset = LocalSnapshotStore(root=tmp_path).load_stops()

    assert dataset.localities == ("Kramerhof", "Prohn")
    kramerhof = dataset.get("Kramerhof")
    assert kramerhof is not None
    assert kramerhof.fetched_at == datetime(2026, 3, 1, 9, 15, tzinfo=timezone.utc)
    assert kramerhof.stops == (StopRecord(id="k1", value="Kramerhof, Ort", label="Ort"),)
    assert dataset.get("Prohn").stops == ()  # type: ignore[union-attr]


def test_write_failure_raises_cache_write_failed(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    store = LocalSnapshotStore(root=blocker)

    with pytest.raises(CacheWriteFailed):
        store.store_stops(PerCityDataset.empty())
