"""Data models for the Lift Tracker."""

from .document import (
    DEFAULT_EXERCISES,
    AppDocument,
    Exercise,
    StorageConfig,
    User,
    WorkoutLog,
    WorkoutSet,
    namespaced_copy,
    seed_document,
)

__all__ = [
    "DEFAULT_EXERCISES",
    "AppDocument",
    "Exercise",
    "StorageConfig",
    "User",
    "WorkoutLog",
    "WorkoutSet",
    "namespaced_copy",
    "seed_document",
]
