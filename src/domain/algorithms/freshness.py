from __future__ import annotations

from datetime import datetime, timedelta, timezone

from src.domain.models import CitySnapshot

DEFAULT_CACHE_TTL = timedelta(hours=23)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so ages can always be computed."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def snapshot_age(snapshot: CitySnapshot, *, now: datetime) -> timedelta:
    return as_utc(now) - as_utc(snapshot.fetched_at)


def needs_refresh(
    snapshot: CitySnapshot | None, *, now: datetime, ttl: timedelta = DEFAULT_CACHE_TTL
) -> bool:
    """A snapshot is refreshed when missing or strictly older than the TTL."""

    if snapshot is None:
        return True
    return snapshot_age(snapshot, now=now) > ttl
