from .pipeline import (
    AlreadyRunning,
    CacheCorrupt,
    CacheWriteFailed,
    FetchFailed,
    GuardReleaseFailed,
    PublishFailed,
    StopSyncError,
)

__all__ = [
    "AlreadyRunning",
    "CacheCorrupt",
    "CacheWriteFailed",
    "FetchFailed",
    "GuardReleaseFailed",
    "PublishFailed",
    "StopSyncError",
]
