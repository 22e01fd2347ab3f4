from .geo import GeoPoint
from .map_element import MapElement, MapElementTags
from .match import MatchedGroup, ReconciliationResult
from .snapshot import CitySnapshot, MapSnapshot, PerCityDataset
from .stop import StopRecord

__all__ = [
    "CitySnapshot",
    "GeoPoint",
    "MapElement",
    "MapElementTags",
    "MapSnapshot",
    "MatchedGroup",
    "PerCityDataset",
    "ReconciliationResult",
    "StopRecord",
]
