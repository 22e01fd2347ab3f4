from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from src.domain.models import MapSnapshot


class IMapDataClient(ABC):
    """Port for fetching bus stop map elements (e.g. via Overpass)."""

    @abstractmethod
    def fetch(self, localities: Sequence[str]) -> MapSnapshot:
        """Return a fresh snapshot covering the given localities.

        Raises FetchFailed when the upstream service cannot deliver one.
        """
