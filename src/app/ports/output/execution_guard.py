from __future__ import annotations

from abc import ABC, abstractmethod


class IExecutionGuard(ABC):
    """Ensures a single pipeline run at a time."""

    @abstractmethod
    def acquire(self) -> None:
        """Take the guard or raise AlreadyRunning."""

    @abstractmethod
    def release(self) -> None:
        """Give the guard back; raise GuardReleaseFailed if that is impossible."""
