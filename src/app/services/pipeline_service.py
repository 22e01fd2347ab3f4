from __future__ import annotations

import logging
from dataclasses import dataclass

from src.app.ports.output import DatasetKind, IExecutionGuard, IResultSink, ISnapshotStore
from src.domain.algorithms.reconcile import OrphanMode, reconcile
from src.domain.exceptions import CacheWriteFailed
from src.domain.models import MapSnapshot, PerCityDataset, ReconciliationResult

from .refresh_service import CityRefreshService, RefreshOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PipelineResult:
    dataset: PerCityDataset
    map_snapshot: MapSnapshot
    reconciliation: ReconciliationResult
    refresh: RefreshOutcome
    cache_written: bool = True


@dataclass(slots=True)
class ReconciliationPipeline:
    """One guarded run: load caches, refresh stops, persist, reconcile, publish.

    AlreadyRunning, CacheCorrupt, PublishFailed and GuardReleaseFailed propagate
    to the caller; the guard is released on every path once it was acquired.
    """

    guard: IExecutionGuard
    store: ISnapshotStore
    refresher: CityRefreshService
    sink: IResultSink | None = None
    orphan_mode: OrphanMode = "per_comparison"

    def run(self) -> PipelineResult:
        self.guard.acquire()
        try:
            return self._run_guarded()
        finally:
            self.guard.release()

    def _run_guarded(self) -> PipelineResult:
        logger.info("Loading cached snapshots")
        previous = self.store.load_stops()
        map_snapshot = self.store.load_map()

        outcome = self.refresher.refresh(previous)
        dataset = outcome.dataset

        cache_written = True
        try:
            self.store.store_stops(dataset)
        except CacheWriteFailed as exc:
            # The in-memory dataset is still good enough for this run.
            logger.error("%s", exc)
            cache_written = False

        if map_snapshot.is_empty:
            logger.warning(
                "Map cache at %s is empty; every stop will be unmatched",
                self.store.location(DatasetKind.MAP),
            )
        logger.info("Map data timestamp_areas_base: %s", map_snapshot.timestamp_areas_base)
        logger.info("Map data timestamp_osm_base: %s", map_snapshot.timestamp_osm_base)

        result = reconcile(dataset, map_snapshot, orphan_mode=self.orphan_mode)
        logger.debug("Reconciliation finished after %d comparisons", result.comparisons)
        logger.info(
            "Reconciled %d stops: %d orphan groups "
            "(fetched=%s reused=%s fallback=%s omitted=%s)",
            len(result.matched),
            len(result.orphans),
            ",".join(outcome.fetched) or "-",
            ",".join(outcome.reused) or "-",
            ",".join(outcome.fallback) or "-",
            ",".join(outcome.omitted) or "-",
        )

        if self.sink is not None:
            self.sink.publish(result)

        return PipelineResult(
            dataset=dataset,
            map_snapshot=map_snapshot,
            reconciliation=result,
            refresh=outcome,
            cache_written=cache_written,
        )
