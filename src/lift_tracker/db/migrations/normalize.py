"""
Document normalization: per-user exercise catalogs

Brings any persisted JSON, old or new shape, into the current AppDocument:
- Current shape (adamExercises / eliaExercises) passes through, missing
  lists default to empty.
- Legacy shape (one shared "exercises" list) is split into both users'
  catalogs with ids namespaced per user ("adam_<id>", "elia_<id>").
- Anything malformed degrades to empty lists instead of failing.

The function is pure and total, and normalizing its own output is a no-op.
"""

import logging
from typing import Any, List, Optional, Union

from ...models.document import (
    AppDocument,
    Exercise,
    User,
    WorkoutLog,
    WorkoutSet,
    namespaced_copy,
)


MIGRATION_VERSION = "002"
MIGRATION_NAME = "per_user_exercises"

LEGACY_EXERCISES_FIELD = "exercises"

logger = logging.getLogger(__name__)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _number(value: Any) -> Union[int, float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return 0


def _integer(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _exercise(raw: Any) -> Optional[Exercise]:
    if not isinstance(raw, dict):
        return None
    return Exercise(
        id=_text(raw.get("id")),
        name=_text(raw.get("name")),
        category=_text(raw.get("category")),
    )


def _workout_set(raw: Any) -> Optional[WorkoutSet]:
    if not isinstance(raw, dict):
        return None
    return WorkoutSet(
        id=_text(raw.get("id")),
        weight=_number(raw.get("weight")),
        reps=_integer(raw.get("reps")),
        timestamp=_integer(raw.get("timestamp")),
    )


def _workout_log(raw: Any) -> Optional[WorkoutLog]:
    if not isinstance(raw, dict):
        return None
    try:
        user = User(raw.get("user"))
    except ValueError:
        # A log that belongs to nobody cannot be shown or merged into
        return None
    sets = [s for s in map(_workout_set, _as_list(raw.get("sets"))) if s is not None]
    if not sets:
        return None
    return WorkoutLog(
        id=_text(raw.get("id")),
        exercise_id=_text(raw.get("exerciseId")),
        user=user,
        date=_text(raw.get("date")),
        sets=sets,
    )


def _exercises(values: Any) -> List[Exercise]:
    return [e for e in map(_exercise, _as_list(values)) if e is not None]


def is_legacy_shape(raw: Any) -> bool:
    """True for documents with a shared exercise list and no per-user lists."""
    if not isinstance(raw, dict):
        return False
    has_per_user = any(user.exercises_field in raw for user in User)
    return not has_per_user and LEGACY_EXERCISES_FIELD in raw


def normalize(raw: Any) -> AppDocument:
    """
    Convert arbitrary persisted JSON into an AppDocument.

    Args:
        raw: Parsed JSON from the local cache or the remote store

    Returns:
        A document in the current shape. Never raises; the worst case is an
        empty document.
    """
    if not isinstance(raw, dict):
        logger.warning("Stored document is not a JSON object, starting empty")
        return AppDocument()

    logs = [log for log in map(_workout_log, _as_list(raw.get("logs"))) if log is not None]

    if is_legacy_shape(raw):
        shared = _exercises(raw.get(LEGACY_EXERCISES_FIELD))
        logger.info(
            "Migration %s (%s): splitting %d shared exercises into per-user catalogs",
            MIGRATION_VERSION,
            MIGRATION_NAME,
            len(shared),
        )
        return AppDocument(
            adam_exercises=[namespaced_copy(e, User.ADAM) for e in shared],
            elia_exercises=[namespaced_copy(e, User.ELIA) for e in shared],
            logs=logs,
        )

    return AppDocument(
        adam_exercises=_exercises(raw.get(User.ADAM.exercises_field)),
        elia_exercises=_exercises(raw.get(User.ELIA.exercises_field)),
        logs=logs,
    )
