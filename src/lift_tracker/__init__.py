"""Strength training log for two users with local cache and GitHub sync."""

from .deps import create_coordinator, create_tracker_service
from .models.document import AppDocument, Exercise, StorageConfig, User, WorkoutLog, WorkoutSet
from .services.persistence import PersistenceCoordinator, SaveResult, SyncStatus
from .services.tracker import TrackerService

__version__ = "0.1.0"

__all__ = [
    "AppDocument",
    "Exercise",
    "PersistenceCoordinator",
    "SaveResult",
    "StorageConfig",
    "SyncStatus",
    "TrackerService",
    "User",
    "WorkoutLog",
    "WorkoutSet",
    "create_coordinator",
    "create_tracker_service",
]
