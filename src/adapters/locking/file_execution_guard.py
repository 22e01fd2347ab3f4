from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from src.app.ports.output import IExecutionGuard
from src.domain.exceptions import AlreadyRunning, GuardReleaseFailed

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FileExecutionGuard(IExecutionGuard):
    """Lock file guard: the file existing means a run is in progress.

    The file is created with O_EXCL so two processes can never both acquire it.
    A stale file left by a crashed run has to be removed by hand.
    """

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def acquire(self) -> None:
        if self.path.parent != Path(""):
            self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError as exc:
            raise AlreadyRunning(str(self.path)) from exc
        os.close(fd)
        logger.debug("Created lock file %s", self.path)

    def release(self) -> None:
        logger.debug("Removing lock file %s", self.path)
        try:
            self.path.unlink()
        except OSError as exc:
            logger.critical(
                "Could not remove lock file %s; remove it manually before the next run",
                self.path,
            )
            raise GuardReleaseFailed(str(self.path), str(exc)) from exc
