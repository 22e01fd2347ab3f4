from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any

from src.app.ports.output import DatasetKind, ISnapshotStore
from src.domain.exceptions import CacheCorrupt
from src.domain.models import MapSnapshot, PerCityDataset

from .snapshot_codec import codec_for

logger = logging.getLogger(__name__)


class BlobSnapshotStore(ISnapshotStore):
    """Snapshot store over an opaque blob per dataset kind.

    Subclasses only move bytes; encoding/decoding is picked per kind from the
    codec registry.
    """

    @abstractmethod
    def _read_blob(self, kind: DatasetKind) -> bytes | None:
        """Return the stored payload, or None if nothing was stored yet."""

    @abstractmethod
    def _write_blob(self, kind: DatasetKind, data: bytes) -> None:
        """Atomically replace the stored payload; raise CacheWriteFailed on failure."""

    def load_stops(self) -> PerCityDataset:
        return self._load(DatasetKind.STOPS)

    def store_stops(self, dataset: PerCityDataset) -> None:
        self._store(DatasetKind.STOPS, dataset)

    def load_map(self) -> MapSnapshot:
        return self._load(DatasetKind.MAP)

    def store_map(self, snapshot: MapSnapshot) -> None:
        self._store(DatasetKind.MAP, snapshot)

    def _load(self, kind: DatasetKind) -> Any:
        codec = codec_for(kind)
        data = self._read_blob(kind)
        if data is None:
            logger.info(
                "No %s cache at %s yet, starting empty", kind.value, self.location(kind)
            )
            return codec.empty()

        try:
            return codec.decode(data)
        except ValueError as exc:
            raise CacheCorrupt(kind.value, self.location(kind), str(exc)) from exc

    def _store(self, kind: DatasetKind, snapshot: Any) -> None:
        data = codec_for(kind).encode(snapshot)
        self._write_blob(kind, data)
        logger.debug("Wrote %d bytes to %s", len(data), self.location(kind))
