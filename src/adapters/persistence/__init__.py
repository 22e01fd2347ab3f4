from .local_snapshot_store import LocalSnapshotStore
from .s3_snapshot_store import S3SnapshotStore

__all__ = [
    "LocalSnapshotStore",
    "S3SnapshotStore",
]
