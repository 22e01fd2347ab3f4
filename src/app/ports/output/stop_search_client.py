from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import StopRecord


class IStopSearchClient(ABC):
    """Port for the transit-agency stop search (one query per locality)."""

    @abstractmethod
    def search(self, locality: str) -> tuple[StopRecord, ...]:
        """Return all stops for a locality; raise FetchFailed on any failure."""
