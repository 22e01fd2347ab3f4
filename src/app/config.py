from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Literal, cast

from src.domain.algorithms.reconcile import ORPHAN_MODES, OrphanMode

CacheBackend = Literal["local", "s3"]

DEFAULT_LOCALITIES: tuple[str, ...] = (
    "Altefähr",
    "Kramerhof",
    "Parow",
    "Prohn",
    "Stralsund",
)
DEFAULT_STOP_SEARCH_URL = "https://vvr.verbindungssuche.de/fpl/suhast.php"
DEFAULT_OVERPASS_URL = "https://overpass-api.de/api/interpreter"


def _env_str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


def _parse_localities(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Everything a run needs to know, passed explicitly to each component.

    Env vars (see `from_env`):
      - LOCALITIES: comma separated locality names
      - CACHE_TTL_HOURS (default 23)
      - CACHE_ROOT (default: cache)
      - LOCK_FILE (default: .lock)
      - ORPHAN_MODE: per_comparison|unmatched_once
      - MATCHES_OUTPUT_PATH (default: output/matches.json)
      - STOP_SEARCH_URL, OVERPASS_URL
      - HTTP_TIMEOUT_S (default 10), OVERPASS_TIMEOUT_S (default 120)
      - CACHE_BACKEND: local|s3, CACHE_BUCKET, CACHE_PREFIX
    """

    localities: tuple[str, ...] = DEFAULT_LOCALITIES
    ttl_hours: float = 23.0
    cache_root: Path = field(default_factory=lambda: Path("cache"))
    lock_path: Path = field(default_factory=lambda: Path(".lock"))
    orphan_mode: OrphanMode = "per_comparison"
    output_path: Path = field(default_factory=lambda: Path("output/matches.json"))
    stop_search_url: str = DEFAULT_STOP_SEARCH_URL
    overpass_url: str = DEFAULT_OVERPASS_URL
    http_timeout_s: float = 10.0
    map_timeout_s: float = 120.0
    cache_backend: CacheBackend = "local"
    cache_bucket: str | None = None
    cache_prefix: str = "stop-sync-cache"

    def __post_init__(self) -> None:
        # Keep the configured order, drop repeats.
        unique = tuple(dict.fromkeys(self.localities))
        object.__setattr__(self, "localities", unique)
        object.__setattr__(self, "cache_root", Path(self.cache_root))
        object.__setattr__(self, "lock_path", Path(self.lock_path))
        object.__setattr__(self, "output_path", Path(self.output_path))

        if not unique:
            raise ValueError("At least one locality must be configured")
        if self.ttl_hours <= 0:
            raise ValueError(f"ttl_hours must be positive: {self.ttl_hours}")
        if self.orphan_mode not in ORPHAN_MODES:
            raise ValueError(f"Unsupported ORPHAN_MODE: {self.orphan_mode}")
        if self.cache_backend not in ("local", "s3"):
            raise ValueError(f"Unsupported CACHE_BACKEND: {self.cache_backend}")
        if self.cache_backend == "s3" and not self.cache_bucket:
            raise ValueError("CACHE_BUCKET is required when CACHE_BACKEND=s3")
        if self.http_timeout_s <= 0 or self.map_timeout_s <= 0:
            raise ValueError("Timeouts must be positive")

    @property
    def ttl(self) -> timedelta:
        return timedelta(hours=self.ttl_hours)

    @staticmethod
    def from_env() -> "PipelineConfig":
        kwargs: dict[str, object] = {}

        localities = _env_str("LOCALITIES")
        if localities:
            kwargs["localities"] = _parse_localities(localities)
        if (ttl := _env_str("CACHE_TTL_HOURS")) is not None:
            kwargs["ttl_hours"] = float(ttl)
        if (root := _env_str("CACHE_ROOT")) is not None:
            kwargs["cache_root"] = Path(root)
        if (lock := _env_str("LOCK_FILE")) is not None:
            kwargs["lock_path"] = Path(lock)
        if (mode := _env_str("ORPHAN_MODE")) is not None:
            kwargs["orphan_mode"] = cast(OrphanMode, mode.lower())
        if (out := _env_str("MATCHES_OUTPUT_PATH")) is not None:
            kwargs["output_path"] = Path(out)
        if (url := _env_str("STOP_SEARCH_URL")) is not None:
            kwargs["stop_search_url"] = url
        if (url := _env_str("OVERPASS_URL")) is not None:
            kwargs["overpass_url"] = url
        if (timeout := _env_str("HTTP_TIMEOUT_S")) is not None:
            kwargs["http_timeout_s"] = float(timeout)
        if (timeout := _env_str("OVERPASS_TIMEOUT_S")) is not None:
            kwargs["map_timeout_s"] = float(timeout)
        if (backend := _env_str("CACHE_BACKEND")) is not None:
            kwargs["cache_backend"] = cast(CacheBackend, backend.lower())
        if (bucket := _env_str("CACHE_BUCKET")) is not None:
            kwargs["cache_bucket"] = bucket
        if (prefix := _env_str("CACHE_PREFIX")) is not None:
            kwargs["cache_prefix"] = prefix.strip("/")

        return PipelineConfig(**kwargs)  # type: ignore[arg-type]
