from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from src.adapters.api.dependencies import get_pipeline
from src.adapters.api.schemas.matches import RunSummarySchema
from src.app.services.pipeline_service import ReconciliationPipeline
from src.domain.exceptions import AlreadyRunning

router = APIRouter(prefix="/runs", tags=["runs"])


@router.post("", response_model=RunSummarySchema)
def start_run(
    pipeline: ReconciliationPipeline = Depends(get_pipeline),
) -> RunSummarySchema:
    try:
        result = pipeline.run()
    except AlreadyRunning as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    return RunSummarySchema(
        fetched=list(result.refresh.fetched),
        reused=list(result.refresh.reused),
        fallback=list(result.refresh.fallback),
        omitted=list(result.refresh.omitted),
        cache_written=result.cache_written,
        matched_count=len(result.reconciliation.matched),
        orphan_count=len(result.reconciliation.orphans),
    )
