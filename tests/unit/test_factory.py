from __future__ import annotations

import pytest

from src.adapters.factory import build_map_seed_service, build_pipeline
from src.adapters.http import OverpassMapClient, VvrStopSearchClient
from src.adapters.persistence import S3SnapshotStore
from src.app.config import PipelineConfig

pytestmark = pytest.mark.unit


def test_adapters_take_endpoints_from_config_not_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    for name in ("STOP_SEARCH_URL", "OVERPASS_URL", "CACHE_BUCKET", "CACHE_PREFIX"):
        monkeypatch.setenv(name, "from-environment")
    config = PipelineConfig(
        stop_search_url="https://vvr.test/suhast.php",
        http_timeout_s=3.0,
        overpass_url="https://overpass.test/api/interpreter",
        map_timeout_s=7.0,
        cache_backend="s3",
        cache_bucket="stops",
        cache_prefix="nightly",
    )

    fetcher = build_pipeline(config, write_output=False).refresher.fetcher
    seed = build_map_seed_service(config)

    assert isinstance(fetcher, VvrStopSearchClient)
    assert (fetcher.url, fetcher.timeout_s) == ("https://vvr.test/suhast.php", 3.0)
    assert isinstance(seed.client, OverpassMapClient)
    assert (seed.client.url, seed.client.timeout_s) == (
        "https://overpass.test/api/interpreter",
        7.0,
    )
    assert isinstance(seed.store, S3SnapshotStore)
    assert (seed.store.bucket, seed.store.prefix) == ("stops", "nightly")
