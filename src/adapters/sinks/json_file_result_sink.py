from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from src.adapters.schemas import matches_document
from src.app.ports.output import IResultSink
from src.domain.exceptions import PublishFailed
from src.domain.models import ReconciliationResult

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class JsonFileResultSink(IResultSink):
    """Writes the reconciled groups to a JSON file (same shape as GET /matches).

    Raises PublishFailed when the file cannot be written; the previous file,
    if any, is left untouched.
    """

    path: Path
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def publish(self, result: ReconciliationResult) -> None:
        doc = matches_document(result, generated_at=self.clock())

        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, "w", encoding="utf-8") as fp:
                fp.write(doc.model_dump_json(indent=2))
            os.replace(tmp, self.path)
        except OSError as exc:
            raise PublishFailed(str(self.path), str(exc)) from exc
        finally:
            if tmp.exists():
                tmp.unlink()
        logger.info("Wrote %d groups to %s", len(result.groups), self.path)
