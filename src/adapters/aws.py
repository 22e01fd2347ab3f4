from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

import boto3
from botocore.client import BaseClient

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client
else:
    S3Client = BaseClient  # type: ignore[misc,assignment]


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


@dataclass(frozen=True, slots=True)
class AwsRuntimeConfig:
    use_localstack: bool
    region: str
    endpoint_url: str | None

    @staticmethod
    def from_env() -> "AwsRuntimeConfig":
        endpoint_url = (os.getenv("ENDPOINT_URL") or "").strip() or None
        return AwsRuntimeConfig(
            use_localstack=_env_bool("USE_LOCALSTACK", False),
            region=os.getenv("AWS_REGION", "eu-central-1"),
            endpoint_url=endpoint_url,
        )

    def resolved_endpoint_url(self) -> str | None:
        """ENDPOINT_URL wins; USE_LOCALSTACK falls back to LOCALSTACK_ENDPOINT_URL."""

        if self.endpoint_url:
            return self.endpoint_url
        if self.use_localstack:
            return os.getenv("LOCALSTACK_ENDPOINT_URL", "http://localhost:4566")
        return None


def s3_client() -> S3Client:
    cfg = AwsRuntimeConfig.from_env()
    session = boto3.session.Session(region_name=cfg.region)
    return session.client("s3", endpoint_url=cfg.resolved_endpoint_url())
