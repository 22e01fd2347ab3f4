from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import ReconciliationResult


class IResultSink(ABC):
    """Receives the reconciled groups of a run for rendering/publishing."""

    @abstractmethod
    def publish(self, result: ReconciliationResult) -> None:
        raise NotImplementedError
