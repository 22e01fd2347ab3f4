from __future__ import annotations

from src.adapters.http import OverpassMapClient, VvrStopSearchClient
from src.adapters.locking import FileExecutionGuard
from src.adapters.persistence import LocalSnapshotStore, S3SnapshotStore
from src.adapters.sinks import JsonFileResultSink
from src.app.config import PipelineConfig
from src.app.ports.output import ISnapshotStore
from src.app.services.map_seed_service import MapSeedService
from src.app.services.match_view_service import MatchViewService
from src.app.services.pipeline_service import ReconciliationPipeline
from src.app.services.refresh_service import CityRefreshService


def build_snapshot_store(config: PipelineConfig) -> ISnapshotStore:
    if config.cache_backend == "s3":
        return S3SnapshotStore(bucket=config.cache_bucket, prefix=config.cache_prefix)
    return LocalSnapshotStore(root=config.cache_root)


def build_pipeline(
    config: PipelineConfig, *, write_output: bool = True
) -> ReconciliationPipeline:
    fetcher = VvrStopSearchClient(
        url=config.stop_search_url, timeout_s=config.http_timeout_s
    )
    return ReconciliationPipeline(
        guard=FileExecutionGuard(path=config.lock_path),
        store=build_snapshot_store(config),
        refresher=CityRefreshService(
            fetcher=fetcher, localities=config.localities, ttl=config.ttl
        ),
        sink=JsonFileResultSink(path=config.output_path) if write_output else None,
        orphan_mode=config.orphan_mode,
    )


def build_map_seed_service(config: PipelineConfig) -> MapSeedService:
    return MapSeedService(
        guard=FileExecutionGuard(path=config.lock_path),
        store=build_snapshot_store(config),
        client=OverpassMapClient(url=config.overpass_url, timeout_s=config.map_timeout_s),
        localities=config.localities,
    )


def build_match_view_service(config: PipelineConfig) -> MatchViewService:
    return MatchViewService(
        store=build_snapshot_store(config),
        ttl=config.ttl,
        orphan_mode=config.orphan_mode,
    )
