from .overpass_map_client import OverpassMapClient, build_overpass_query
from .vvr_stop_search_client import VvrStopSearchClient

__all__ = [
    "OverpassMapClient",
    "VvrStopSearchClient",
    "build_overpass_query",
]
