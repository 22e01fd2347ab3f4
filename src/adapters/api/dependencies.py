from __future__ import annotations

from src.adapters.factory import build_match_view_service, build_pipeline
from src.app.config import PipelineConfig
from src.app.services.match_view_service import MatchViewService
from src.app.services.pipeline_service import ReconciliationPipeline


def get_config() -> PipelineConfig:
    return PipelineConfig.from_env()


def get_match_view_service() -> MatchViewService:
    return build_match_view_service(get_config())


def get_pipeline() -> ReconciliationPipeline:
    return build_pipeline(get_config())
