from __future__ import annotations

import io
from datetime import datetime, timezone

import boto3
import pytest
from botocore.response import StreamingBody
from botocore.stub import ANY, Stubber

from src.adapters.persistence import s3_snapshot_store
from src.adapters.persistence.s3_snapshot_store import S3SnapshotStore
from src.domain.exceptions import CacheCorrupt, CacheWriteFailed
from src.domain.models import CitySnapshot, PerCityDataset, StopRecord


@pytest.fixture
def stubbed(monkeypatch: pytest.MonkeyPatch):
    client = boto3.session.Session(region_name="eu-central-1").client(
        "s3",
        aws_access_key_id="test",
        aws_secret_access_key="test",
    )
    monkeypatch.setattr(s3_snapshot_store, "s3_client", lambda: client)
    with Stubber(client) as stubber:
        yield stubber
        stubber.assert_no_pending_responses()


def _body(data: bytes) -> StreamingBody:
    return StreamingBody(io.BytesIO(data), len(data))


@pytest.mark.unit
def test_missing_object_reads_as_empty(stubbed: Stubber) -> None:
    stubbed.add_client_error(
        "get_object", service_error_code="NoSuchKey", http_status_code=404
    )

    store = S3SnapshotStore(bucket="cache", prefix="runs/")

    assert len(store.load_stops()) == 0


@pytest.mark.unit
def test_reads_legacy_stops_object(stubbed: Stubber) -> None:
    payload = (
        b'{"CityResults": [{"SearchWord": "Prohn", '
        b'"ResultTimeStamp": "2026-03-01T08:30:00Z", '
        b'"Result": [{"id": "9001", "value": "Prohn, Kirche", "label": "Kirche"}]}]}'
    )
    stubbed.add_response(
        "get_object",
        {"Body": _body(payload)},
        expected_params={"Bucket": "cache", "Key": "runs/vvr.json"},
    )

    dataset = S3SnapshotStore(bucket="cache", prefix="runs").load_stops()

    prohn = dataset.get("Prohn")
    assert prohn is not None
    assert prohn.fetched_at == datetime(2026, 3, 1, 8, 30, tzinfo=timezone.utc)
    assert prohn.stops == (StopRecord(id="9001", value="Prohn, Kirche", label="Kirche"),)


@pytest.mark.unit
def test_access_denied_is_reported_as_corrupt(stubbed: Stubber) -> None:
    stubbed.add_client_error(
        "get_object", service_error_code="AccessDenied", http_status_code=403
    )

    with pytest.raises(CacheCorrupt) as excinfo:
        S3SnapshotStore(bucket="cache", prefix="runs").load_map()

    assert "s3://cache/runs/overpass.json" in str(excinfo.value)


@pytest.mark.unit
def test_store_writes_json_and_maps_errors(stubbed: Stubber) -> None:
    dataset = PerCityDataset(
        snapshots=(
            CitySnapshot(
                locality="Parow",
                fetched_at=datetime(2026, 3, 2, tzinfo=timezone.utc),
                stops=(),
            ),
        )
    )
    stubbed.add_response(
        "put_object",
        {},
        expected_params={
            "Bucket": "cache",
            "Key": "runs/vvr.json",
            "Body": ANY,
            "ContentType": "application/json",
        },
    )
    stubbed.add_client_error(
        "put_object", service_error_code="SlowDown", http_status_code=503
    )

    store = S3SnapshotStore(bucket="cache", prefix="runs")
    store.store_stops(dataset)
    with pytest.raises(CacheWriteFailed):
        store.store_stops(dataset)
