from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.matches import router as matches_router
from src.adapters.api.controllers.runs import router as runs_router
from src.domain.exceptions import StopSyncError

app = FastAPI(title="Stop Sync")
app.include_router(matches_router)
app.include_router(runs_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return JSON for every unhandled error, never Starlette's plain-text 500."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = (os.getenv("STOPSYNC_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }

    if reveal or isinstance(exc, (StopSyncError, ValueError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
