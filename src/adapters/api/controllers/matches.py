from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from src.adapters.api.dependencies import get_match_view_service
from src.adapters.api.schemas.matches import (
    LocalityStatusSchema,
    LocalityStopsSchema,
    StopSchema,
)
from src.adapters.schemas import MatchesResponseSchema, matches_document
from src.app.services.match_view_service import MatchViewService

router = APIRouter(tags=["matches"])


@router.get("/localities", response_model=list[LocalityStatusSchema])
def list_localities(
    service: MatchViewService = Depends(get_match_view_service),
) -> list[LocalityStatusSchema]:
    return [
        LocalityStatusSchema(
            locality=s.locality,
            fetched_at=s.fetched_at,
            age_s=s.age.total_seconds(),
            stop_count=s.stop_count,
            is_stale=s.is_stale,
        )
        for s in service.list_localities()
    ]


@router.get("/localities/{locality}/stops", response_model=LocalityStopsSchema)
def get_locality_stops(
    locality: str,
    service: MatchViewService = Depends(get_match_view_service),
) -> LocalityStopsSchema:
    snap = service.city_snapshot(locality=locality)
    if snap is None:
        raise HTTPException(status_code=404, detail="Locality not cached")
    return LocalityStopsSchema(
        locality=snap.locality,
        fetched_at=snap.fetched_at,
        stops=[StopSchema(id=s.id, value=s.value, label=s.label) for s in snap.stops],
    )


@router.get("/matches", response_model=MatchesResponseSchema)
def get_matches(
    include_orphans: bool = Query(default=True),
    service: MatchViewService = Depends(get_match_view_service),
) -> MatchesResponseSchema:
    # Computed from the cache only; POST /runs refreshes it.
    return matches_document(
        service.matches(),
        generated_at=datetime.now(timezone.utc),
        include_orphans=include_orphans,
    )
