from __future__ import annotations

from dataclasses import dataclass

import httpx
from pydantic import TypeAdapter

from src.adapters.schemas import StopRecordModel
from src.app.ports.output import IStopSearchClient
from src.domain.exceptions import FetchFailed
from src.domain.models import StopRecord

_STOP_LIST = TypeAdapter(list[StopRecordModel])


@dataclass(slots=True)
class VvrStopSearchClient(IStopSearchClient):
    """Queries the VVR stop search (`suhast.php?query=<locality>`).

    The endpoint answers with a JSON list of `{id, value, label}` objects, or
    `null` when nothing matches. Any other body is a failed fetch.
    """

    url: str
    timeout_s: float
    transport: httpx.BaseTransport | None = None

    def search(self, locality: str) -> tuple[StopRecord, ...]:
        try:
            with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
                resp = client.get(self.url, params={"query": locality})
                resp.raise_for_status()
                payload = resp.json()
            records = _STOP_LIST.validate_python([] if payload is None else payload)
        except (httpx.HTTPError, ValueError) as exc:
            raise FetchFailed(locality, f"{type(exc).__name__}: {exc}") from exc

        return tuple(r.to_domain() for r in records)
