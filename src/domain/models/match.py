from __future__ import annotations

from dataclasses import dataclass

from .map_element import MapElement


@dataclass(frozen=True, slots=True)
class MatchedGroup:
    """A transit-agency stop together with the map elements that carry its name.

    Orphan groups have an empty `transit_id` and wrap a single map element
    that did not match the stop it was compared against.
    """

    name: str
    transit_id: str
    locality: str
    elements: tuple[MapElement, ...] = ()

    @property
    def is_orphan(self) -> bool:
        return not self.transit_id


@dataclass(frozen=True, slots=True)
class ReconciliationResult:
    groups: tuple[MatchedGroup, ...] = ()
    comparisons: int = 0

    @property
    def matched(self) -> tuple[MatchedGroup, ...]:
        return tuple(g for g in self.groups if not g.is_orphan)

    @property
    def orphans(self) -> tuple[MatchedGroup, ...]:
        return tuple(g for g in self.groups if g.is_orphan)
