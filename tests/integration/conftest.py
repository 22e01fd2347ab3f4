from __future__ import annotations

import os
from collections.abc import Iterator
from uuid import uuid4

import httpx
import pytest
from botocore.exceptions import ClientError

from src.adapters.aws import AwsRuntimeConfig, s3_client
from src.adapters.persistence import S3SnapshotStore

CACHE_BUCKET = "stop-sync-test-cache"


@pytest.fixture(scope="session")
def localstack_endpoint() -> str:
    """Point boto3 at LocalStack and make sure it answers.

    Skips the integration tests when LocalStack is down, except in CI
    (or with REQUIRE_LOCALSTACK set) where that is a failure.
    """

    os.environ.setdefault("USE_LOCALSTACK", "true")
    os.environ.setdefault("AWS_REGION", "eu-central-1")
    # boto3 refuses to sign requests without credentials, LocalStack accepts any.
    os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
    os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")

    endpoint = AwsRuntimeConfig.from_env().resolved_endpoint_url()
    assert endpoint is not None

    try:
        healthy = httpx.get(f"{endpoint.rstrip('/')}/_localstack/health", timeout=1.5)
        reachable = healthy.is_success
    except httpx.HTTPError:
        reachable = False

    if not reachable:
        msg = f"LocalStack not reachable at {endpoint}"
        if os.getenv("CI") or os.getenv("REQUIRE_LOCALSTACK"):
            pytest.fail(msg, pytrace=False)
        pytest.skip(msg)
    return endpoint


@pytest.fixture(scope="session")
def cache_bucket(localstack_endpoint: str) -> str:
    region = os.environ["AWS_REGION"]
    kwargs: dict = {"Bucket": CACHE_BUCKET}
    # us-east-1 rejects an explicit LocationConstraint.
    if region != "us-east-1":
        kwargs["CreateBucketConfiguration"] = {"LocationConstraint": region}
    try:
        s3_client().create_bucket(**kwargs)
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code")
        if code not in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
            raise
    return CACHE_BUCKET


@pytest.fixture
def s3_store(cache_bucket: str) -> Iterator[S3SnapshotStore]:
    """A store under a fresh prefix; its objects are deleted afterwards."""

    store = S3SnapshotStore(bucket=cache_bucket, prefix=f"cache-test-{uuid4()}")
    yield store

    s3 = s3_client()
    listed = s3.list_objects_v2(Bucket=cache_bucket, Prefix=f"{store.prefix}/")
    for obj in listed.get("Contents", []):
        s3.delete_object(Bucket=cache_bucket, Key=obj["Key"])
