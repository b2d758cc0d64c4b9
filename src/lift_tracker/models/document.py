"""Document models for exercise catalogs and workout logs.

The whole dataset is one AppDocument persisted as a unit. Field names in
to_dict()/from_dict() follow the JSON wire format shared by the local cache
and the remote store.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class User(str, Enum):
    """The two people whose training is tracked."""
    ADAM = "Adam"
    ELIA = "Elia"

    @property
    def id_prefix(self) -> str:
        """Prefix that namespaces this user's exercise ids."""
        return f"{self.value.lower()}_"

    @property
    def exercises_field(self) -> str:
        """Document field holding this user's exercise catalog."""
        return f"{self.value.lower()}Exercises"


@dataclass
class Exercise:
    """An exercise in one user's catalog."""
    id: str
    name: str
    category: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "category": self.category}

    @classmethod
    def from_dict(cls, data: dict) -> "Exercise":
        return cls(id=data["id"], name=data["name"], category=data["category"])


@dataclass
class WorkoutSet:
    """A single set. Immutable once logged; only deletion is supported."""
    id: str
    weight: Union[int, float]
    reps: int
    timestamp: int  # epoch millis

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "weight": self.weight,
            "reps": self.reps,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutSet":
        return cls(
            id=data["id"],
            weight=data["weight"],
            reps=data["reps"],
            timestamp=data["timestamp"],
        )


@dataclass
class WorkoutLog:
    """
    All sets one user did for one exercise on one day.

    (user, exercise_id, date) is the natural key: add_set merges into an
    existing log rather than creating a second one.
    """
    id: str
    exercise_id: str
    user: User
    date: str  # YYYY-MM-DD
    sets: List[WorkoutSet] = field(default_factory=list)

    def __post_init__(self):
        if isinstance(self.user, str) and not isinstance(self.user, User):
            self.user = User(self.user)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "exerciseId": self.exercise_id,
            "user": self.user.value,
            "date": self.date,
            "sets": [s.to_dict() for s in self.sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkoutLog":
        return cls(
            id=data["id"],
            exercise_id=data["exerciseId"],
            user=User(data["user"]),
            date=data["date"],
            sets=[WorkoutSet.from_dict(s) for s in data.get("sets", [])],
        )


@dataclass
class AppDocument:
    """The aggregate root: both exercise catalogs plus every workout log."""
    adam_exercises: List[Exercise] = field(default_factory=list)
    elia_exercises: List[Exercise] = field(default_factory=list)
    logs: List[WorkoutLog] = field(default_factory=list)

    def exercises_for(self, user: User) -> List[Exercise]:
        """The live catalog list for a user (mutations affect the document)."""
        if user == User.ADAM:
            return self.adam_exercises
        return self.elia_exercises

    def set_exercises(self, user: User, exercises: List[Exercise]) -> None:
        if user == User.ADAM:
            self.adam_exercises = exercises
        else:
            self.elia_exercises = exercises

    def find_log(self, log_id: str) -> Optional[WorkoutLog]:
        for log in self.logs:
            if log.id == log_id:
                return log
        return None

    def to_dict(self) -> dict:
        return {
            User.ADAM.exercises_field: [e.to_dict() for e in self.adam_exercises],
            User.ELIA.exercises_field: [e.to_dict() for e in self.elia_exercises],
            "logs": [log.to_dict() for log in self.logs],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppDocument":
        """Build from a document already in the current shape.

        Use lift_tracker.db.migrations.normalize for untrusted input.
        """
        return cls(
            adam_exercises=[Exercise.from_dict(e) for e in data.get(User.ADAM.exercises_field, [])],
            elia_exercises=[Exercise.from_dict(e) for e in data.get(User.ELIA.exercises_field, [])],
            logs=[WorkoutLog.from_dict(log) for log in data.get("logs", [])],
        )


@dataclass
class StorageConfig:
    """Where the remote copy of the document lives.

    Field contents are not validated; a bad value just makes the remote
    request fail and the coordinator falls back to local data.
    """
    owner: str = ""
    repo: str = ""
    path: str = ""
    github_token: str = ""

    @property
    def contents_path(self) -> str:
        """Repository-relative endpoint of the document file."""
        return f"{self.owner}/{self.repo}/contents/{self.path.lstrip('/')}"

    def to_dict(self) -> dict:
        return {
            "owner": self.owner,
            "repo": self.repo,
            "path": self.path,
            "githubToken": self.github_token,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StorageConfig":
        return cls(
            owner=str(data.get("owner") or ""),
            repo=str(data.get("repo") or ""),
            path=str(data.get("path") or ""),
            github_token=str(data.get("githubToken") or ""),
        )


DEFAULT_EXERCISES = [
    Exercise(id="ex_1", name="Bench Press", category="Chest"),
    Exercise(id="ex_2", name="Squat", category="Legs"),
    Exercise(id="ex_3", name="Deadlift", category="Back"),
    Exercise(id="ex_4", name="Overhead Press", category="Shoulders"),
]


def namespaced_copy(exercise: Exercise, user: User) -> Exercise:
    """Copy an exercise into a user's catalog, prefixing its id."""
    return Exercise(
        id=f"{user.id_prefix}{exercise.id}",
        name=exercise.name,
        category=exercise.category,
    )


def seed_document() -> AppDocument:
    """Fresh default document: the template exercises for each user, no logs."""
    return AppDocument(
        adam_exercises=[namespaced_copy(e, User.ADAM) for e in DEFAULT_EXERCISES],
        elia_exercises=[namespaced_copy(e, User.ELIA) for e in DEFAULT_EXERCISES],
        logs=[],
    )
