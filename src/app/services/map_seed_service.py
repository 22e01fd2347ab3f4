from __future__ import annotations

import logging
from dataclasses import dataclass

from src.app.ports.output import IExecutionGuard, IMapDataClient, ISnapshotStore
from src.domain.models import MapSnapshot

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MapSeedService:
    """Fetches fresh map data for the configured localities into the map cache.

    Runs under the same execution guard as the reconciliation pipeline, which
    itself only ever reads the map cache. FetchFailed and CacheWriteFailed
    propagate.
    """

    guard: IExecutionGuard
    store: ISnapshotStore
    client: IMapDataClient
    localities: tuple[str, ...]

    def seed(self) -> MapSnapshot:
        self.guard.acquire()
        try:
            snapshot = self.client.fetch(self.localities)
            logger.info(
                "Fetched %d map elements (osm base %s)",
                len(snapshot.elements),
                snapshot.timestamp_osm_base,
            )
            self.store.store_map(snapshot)
            return snapshot
        finally:
            self.guard.release()
