from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from src.app.ports.output import DatasetKind
from src.domain.exceptions import CacheCorrupt, CacheWriteFailed

from .blob_snapshot_store import BlobSnapshotStore


@dataclass(slots=True)
class LocalSnapshotStore(BlobSnapshotStore):
    """Keeps one JSON file per dataset kind under a cache directory.

    Writes go to a temporary sibling file that is then moved into place, so a
    crash never leaves a half-written cache behind.
    """

    root: Path
    stops_filename: str = "vvr.json"
    map_filename: str = "overpass.json"

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    def _path(self, kind: DatasetKind) -> Path:
        name = self.stops_filename if kind is DatasetKind.STOPS else self.map_filename
        return self.root / name

    def location(self, kind: DatasetKind) -> str:
        return str(self._path(kind))

    def _read_blob(self, kind: DatasetKind) -> bytes | None:
        path = self._path(kind)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as exc:
            raise CacheCorrupt(kind.value, str(path), str(exc)) from exc

    def _write_blob(self, kind: DatasetKind, data: bytes) -> None:
        path = self._path(kind)
        tmp = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "wb") as fp:
                fp.write(data)
            os.replace(tmp, path)
        except OSError as exc:
            raise CacheWriteFailed(kind.value, str(path), str(exc)) from exc
        finally:
            if tmp.exists():
                tmp.unlink()
