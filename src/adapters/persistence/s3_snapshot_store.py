from __future__ import annotations

from dataclasses import dataclass

from botocore.exceptions import ClientError

from src.adapters.aws import s3_client
from src.app.ports.output import DatasetKind
from src.domain.exceptions import CacheCorrupt, CacheWriteFailed

from .blob_snapshot_store import BlobSnapshotStore

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass(slots=True)
class S3SnapshotStore(BlobSnapshotStore):
    """Keeps the snapshot caches as S3 objects.

    The AWS endpoint and region come from `src.adapters.aws`.
    """

    bucket: str
    prefix: str = "stop-sync-cache"

    def _key(self, kind: DatasetKind) -> str:
        prefix = self.prefix.strip("/")
        name = "vvr.json" if kind is DatasetKind.STOPS else "overpass.json"
        return f"{prefix}/{name}"

    def location(self, kind: DatasetKind) -> str:
        return f"s3://{self.bucket}/{self._key(kind)}"

    def _read_blob(self, kind: DatasetKind) -> bytes | None:
        s3 = s3_client()
        try:
            obj = s3.get_object(Bucket=self.bucket, Key=self._key(kind))
            return obj["Body"].read()
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_KEY_CODES:
                return None
            raise CacheCorrupt(kind.value, self.location(kind), str(exc)) from exc

    def _write_blob(self, kind: DatasetKind, data: bytes) -> None:
        s3 = s3_client()
        try:
            s3.put_object(
                Bucket=self.bucket,
                Key=self._key(kind),
                Body=data,
                ContentType="application/json",
            )
        except ClientError as exc:
            raise CacheWriteFailed(kind.value, self.location(kind), str(exc)) from exc
