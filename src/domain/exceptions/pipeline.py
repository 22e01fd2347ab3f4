from __future__ import annotations


class StopSyncError(Exception):
    """Base exception for the stop reconciliation pipeline."""


class AlreadyRunning(StopSyncError):
    """Raised when the execution marker exists, i.e. another run is in progress."""

    def __init__(self, path: str) -> None:
        super().__init__(f"lock file exists: {path}")
        self.path = path


class GuardReleaseFailed(StopSyncError):
    """Raised when the execution marker could not be removed.

    The marker stays behind and blocks every later run until it is removed by hand.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"could not remove lock file {path}: {reason}")
        self.path = path


class CacheCorrupt(StopSyncError):
    """Raised when a persisted snapshot cannot be read or decoded."""

    def __init__(self, kind: str, location: str, reason: str) -> None:
        super().__init__(f"corrupt {kind} cache at {location}: {reason}")
        self.kind = kind
        self.location = location


class CacheWriteFailed(StopSyncError):
    """Raised when a snapshot could not be persisted."""

    def __init__(self, kind: str, location: str, reason: str) -> None:
        super().__init__(f"could not write {kind} cache to {location}: {reason}")
        self.kind = kind
        self.location = location


class FetchFailed(StopSyncError):
    """Raised by fetchers when the upstream service could not deliver data for a key."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"fetch failed for {key}: {reason}")
        self.key = key
        self.reason = reason


class PublishFailed(StopSyncError):
    """Raised by result sinks when the reconciliation result could not be written."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"could not publish matches to {location}: {reason}")
        self.location = location
