from __future__ import annotations

from typing import Literal

from src.domain.models import (
    MapElement,
    MapSnapshot,
    MatchedGroup,
    PerCityDataset,
    ReconciliationResult,
)

OrphanMode = Literal["per_comparison", "unmatched_once"]
ORPHAN_MODES: tuple[OrphanMode, ...] = ("per_comparison", "unmatched_once")


def element_matches_stop(element: MapElement, *, name: str, locality: str) -> bool:
    """Exact name comparison.

    `locality` is accepted but not used yet: elements from a neighbouring
    locality with the same stop name will match as well.

    Elements without a `name` tag never match. The previous implementation
    compared a missing tag as `""`, so a stop with an empty display value
    used to match every unnamed element; that no longer happens.
    """

    return element.name is not None and element.name == name


def reconcile(
    dataset: PerCityDataset,
    map_snapshot: MapSnapshot,
    *,
    orphan_mode: OrphanMode = "per_comparison",
) -> ReconciliationResult:
    """Pair every transit-agency stop with the map elements carrying its name.

    Every stop is compared against every map element (no spatial pre-filter).

    With ``orphan_mode="per_comparison"`` each failed (stop, element) comparison
    emits an orphan group for that element, tagged with the stop's locality,
    before the stop's own group is emitted. An element that matches nothing is
    therefore reported once per stop it was compared against.

    With ``orphan_mode="unmatched_once"`` all stop groups are emitted first,
    followed by one orphan per element that matched no stop at all. Those
    orphans carry an empty locality.
    """

    if orphan_mode not in ORPHAN_MODES:
        raise ValueError(f"Unsupported orphan mode: {orphan_mode}")

    groups: list[MatchedGroup] = []
    matched_ids: set[tuple[str, int]] = set()
    comparisons = 0

    for city in dataset:
        for stop in city.stops:
            matched: list[MapElement] = []
            for element in map_snapshot.elements:
                comparisons += 1
                if element_matches_stop(element, name=stop.value, locality=city.locality):
                    matched.append(element)
                    matched_ids.add((element.kind, element.id))
                elif orphan_mode == "per_comparison":
                    groups.append(
                        MatchedGroup(
                            name=element.name or "",
                            transit_id="",
                            locality=city.locality,
                            elements=(element,),
                        )
                    )

            groups.append(
                MatchedGroup(
                    name=stop.value,
                    transit_id=stop.id,
                    locality=city.locality,
                    elements=tuple(matched),
                )
            )

    if orphan_mode == "unmatched_once":
        for element in map_snapshot.elements:
            if (element.kind, element.id) in matched_ids:
                continue
            groups.append(
                MatchedGroup(
                    name=element.name or "",
                    transit_id="",
                    locality="",
                    elements=(element,),
                )
            )

    return ReconciliationResult(groups=tuple(groups), comparisons=comparisons)
