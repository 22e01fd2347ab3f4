from .execution_guard import IExecutionGuard
from .map_data_client import IMapDataClient
from .result_sink import IResultSink
from .snapshot_store import DatasetKind, ISnapshotStore
from .stop_search_client import IStopSearchClient

__all__ = [
    "DatasetKind",
    "IExecutionGuard",
    "IMapDataClient",
    "IResultSink",
    "ISnapshotStore",
    "IStopSearchClient",
]
