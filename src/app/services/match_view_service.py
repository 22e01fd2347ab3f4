from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable

from src.app.ports.output import ISnapshotStore
from src.domain.algorithms.freshness import DEFAULT_CACHE_TTL, needs_refresh, snapshot_age
from src.domain.algorithms.reconcile import OrphanMode, reconcile
from src.domain.models import CitySnapshot, ReconciliationResult

from .refresh_service import utc_now


@dataclass(frozen=True, slots=True)
class LocalityStatus:
    locality: str
    fetched_at: datetime
    age: timedelta
    stop_count: int
    is_stale: bool


@dataclass(slots=True)
class MatchViewService:
    """Read-only queries over the cached datasets (never fetches, never writes)."""

    store: ISnapshotStore
    ttl: timedelta = DEFAULT_CACHE_TTL
    orphan_mode: OrphanMode = "per_comparison"
    clock: Callable[[], datetime] = field(default=utc_now)

    def list_localities(self) -> tuple[LocalityStatus, ...]:
        now = self.clock()
        return tuple(
            LocalityStatus(
                locality=snap.locality,
                fetched_at=snap.fetched_at,
                age=snapshot_age(snap, now=now),
                stop_count=len(snap.stops),
                is_stale=needs_refresh(snap, now=now, ttl=self.ttl),
            )
            for snap in self.store.load_stops()
        )

    def city_snapshot(self, *, locality: str) -> CitySnapshot | None:
        return self.store.load_stops().get(locality)

    def matches(self) -> ReconciliationResult:
        return reconcile(
            self.store.load_stops(),
            self.store.load_map(),
            orphan_mode=self.orphan_mode,
        )
