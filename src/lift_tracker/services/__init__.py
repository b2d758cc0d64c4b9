"""Services: persistence coordination, domain operations and chart data."""

from .persistence import (
    DocumentSource,
    PersistenceCoordinator,
    SaveResult,
    SyncStatus,
    SYNC_FAILED_NOTICE,
)
from .progress import ChartDataPoint, build_chart_points
from .tracker import TrackerService

__all__ = [
    "ChartDataPoint",
    "DocumentSource",
    "PersistenceCoordinator",
    "SaveResult",
    "SyncStatus",
    "SYNC_FAILED_NOTICE",
    "TrackerService",
    "build_chart_points",
]
