from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StopRecord:
    """One stop as returned by the transit-agency stop search."""

    id: str
    value: str  # display name, used for matching
    label: str = ""
