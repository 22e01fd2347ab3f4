from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class StopSchema(BaseModel):
    id: str
    value: str
    label: str = ""


class LocalityStatusSchema(BaseModel):
    locality: str
    fetched_at: datetime
    age_s: float
    stop_count: int
    is_stale: bool


class LocalityStopsSchema(BaseModel):
    locality: str
    fetched_at: datetime
    stops: list[StopSchema]


class RunSummarySchema(BaseModel):
    fetched: list[str]
    reused: list[str]
    fallback: list[str]
    omitted: list[str]
    cache_written: bool
    matched_count: int
    orphan_count: int
