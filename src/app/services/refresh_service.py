from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable

from src.app.ports.output import IStopSearchClient
from src.domain.algorithms.freshness import (
    DEFAULT_CACHE_TTL,
    needs_refresh,
    snapshot_age,
)
from src.domain.exceptions import FetchFailed
from src.domain.models import CitySnapshot, PerCityDataset

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class RefreshOutcome:
    dataset: PerCityDataset
    fetched: tuple[str, ...] = ()
    reused: tuple[str, ...] = ()
    fallback: tuple[str, ...] = ()
    omitted: tuple[str, ...] = ()


@dataclass(slots=True)
class CityRefreshService:
    """Refreshes the per-city stop cache, one locality at a time.

    - Fresh snapshots (age <= ttl) are reused as-is, without calling the fetcher.
    - Stale or missing snapshots are fetched exactly once.
    - A failed fetch keeps the previous snapshot if there is one; otherwise the
      locality is left out of this run. Other localities are not affected.
    """

    fetcher: IStopSearchClient
    localities: tuple[str, ...]
    ttl: timedelta = DEFAULT_CACHE_TTL
    clock: Callable[[], datetime] = field(default=utc_now)

    def refresh(self, previous: PerCityDataset) -> RefreshOutcome:
        snapshots: list[CitySnapshot] = []
        fetched: list[str] = []
        reused: list[str] = []
        fallback: list[str] = []
        omitted: list[str] = []

        for locality in self.localities:
            old = previous.get(locality)
            now = self.clock()

            if old is not None and not needs_refresh(old, now=now, ttl=self.ttl):
                logger.debug(
                    "Reusing cached stops for %s (age %s <= %s)",
                    locality,
                    snapshot_age(old, now=now),
                    self.ttl,
                )
                snapshots.append(old)
                reused.append(locality)
                continue

            if old is not None:
                logger.debug(
                    "Cached stops for %s are older than %s, fetching", locality, self.ttl
                )

            try:
                stops = self.fetcher.search(locality)
            except FetchFailed as exc:
                logger.warning("Stop search failed for %s: %s", locality, exc.reason)
                if old is not None:
                    logger.info("Reusing stale cached stops for %s", locality)
                    snapshots.append(old)
                    fallback.append(locality)
                else:
                    omitted.append(locality)
                continue

            logger.info("Fetched %d stops for %s", len(stops), locality)
            snapshots.append(
                CitySnapshot(locality=locality, fetched_at=now, stops=tuple(stops))
            )
            fetched.append(locality)

        return RefreshOutcome(
            dataset=PerCityDataset.from_snapshots(snapshots),
            fetched=tuple(fetched),
            reused=tuple(reused),
            fallback=tuple(fallback),
            omitted=tuple(omitted),
        )
