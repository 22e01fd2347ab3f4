from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import httpx

from src.adapters.schemas import OverpassResponseModel
from src.app.ports.output import IMapDataClient
from src.domain.exceptions import FetchFailed
from src.domain.models import MapSnapshot

_QUERY_PREFIX = (
    "[out:json][timeout:600];"
    "area[boundary=administrative][admin_level=8][name~'("
)
_QUERY_SUFFIX = (
    ")']->.searchArea;"
    '(nw["highway"="bus_stop"](area.searchArea);'
    'node["public_transport"="stop_position"](area.searchArea););'
    "out;"
)


def build_overpass_query(localities: Sequence[str]) -> str:
    """Overpass QL for bus stops and stop positions in the named municipalities."""

    if not localities:
        raise ValueError("At least one locality is required")
    # Names end up inside a single-quoted QL string, as regex alternatives.
    names = "|".join(name.replace("'", "\\'") for name in localities)
    return f"{_QUERY_PREFIX}{names}{_QUERY_SUFFIX}"


@dataclass(slots=True)
class OverpassMapClient(IMapDataClient):
    """Fetches bus stop elements from an Overpass API instance."""

    url: str
    timeout_s: float
    transport: httpx.BaseTransport | None = None

    def fetch(self, localities: Sequence[str]) -> MapSnapshot:
        query = build_overpass_query(localities)
        try:
            with httpx.Client(timeout=self.timeout_s, transport=self.transport) as client:
                resp = client.get(self.url, params={"data": query})
                resp.raise_for_status()
                model = OverpassResponseModel.model_validate_json(resp.content)
        except (httpx.HTTPError, ValueError) as exc:
            raise FetchFailed("map", f"{type(exc).__name__}: {exc}") from exc

        return model.to_domain()
