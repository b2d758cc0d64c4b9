"""
Tracker service: exercise catalogs, workout logs and sets.

Every operation starts from a fresh coordinator load so it works on the
authoritative copy, and every mutation ends with a save of the whole
document. No reference to the document is kept between calls.
"""

import logging
from typing import List, Optional, Union

from ..models.document import Exercise, User, WorkoutLog, WorkoutSet
from ..utils.dates import local_iso_date
from ..utils.ids import new_id, now_millis
from .persistence import PersistenceCoordinator, SaveResult


logger = logging.getLogger(__name__)


class TrackerService:
    """Domain operations for the two users' training data."""

    def __init__(self, coordinator: PersistenceCoordinator):
        self.coordinator = coordinator

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------

    async def list_exercises(self, user: User) -> List[Exercise]:
        document = await self.coordinator.load()
        return list(document.exercises_for(user))

    @staticmethod
    def new_exercise(name: str, category: str, user: User) -> Exercise:
        """Build an exercise with a fresh id in the user's namespace (not saved)."""
        return Exercise(id=f"{user.id_prefix}{new_id()}", name=name, category=category)

    async def upsert_exercise(self, exercise: Exercise, user: User) -> SaveResult:
        """Replace the user's exercise with the same id, or append it."""
        document = await self.coordinator.load()
        exercises = document.exercises_for(user)
        for index, existing in enumerate(exercises):
            if existing.id == exercise.id:
                exercises[index] = exercise
                break
        else:
            exercises.append(exercise)
        return await self.coordinator.save(document)

    async def remove_exercise(self, exercise_id: str, user: User) -> SaveResult:
        """
        Remove an exercise from the user's catalog.

        Logs that reference it are kept, so history survives with a dangling
        exercise id.
        """
        document = await self.coordinator.load()
        document.set_exercises(
            user, [e for e in document.exercises_for(user) if e.id != exercise_id]
        )
        return await self.coordinator.save(document)

    # ------------------------------------------------------------------
    # Logs
    # ------------------------------------------------------------------

    async def list_logs(self, exercise_id: str, user: User) -> List[WorkoutLog]:
        """One user's logs for an exercise, newest date first."""
        document = await self.coordinator.load()
        logs = [
            log for log in document.logs
            if log.exercise_id == exercise_id and log.user == user
        ]
        # ISO dates are zero-padded, string order is date order
        return sorted(logs, key=lambda log: log.date, reverse=True)

    async def list_all_logs(self, exercise_id: str) -> List[WorkoutLog]:
        """Every log for an exercise id, both users, in stored order."""
        document = await self.coordinator.load()
        return [log for log in document.logs if log.exercise_id == exercise_id]

    async def list_logs_for_comparison(self, exercise_name: str) -> List[WorkoutLog]:
        """
        Logs of both users for the exercise each of them calls exercise_name.

        The users track the same movement under different ids, so the
        exercise is resolved by name in each catalog separately.
        """
        document = await self.coordinator.load()
        exercise_ids = set()
        for user in User:
            match = next(
                (e for e in document.exercises_for(user) if e.name == exercise_name),
                None,
            )
            if match is not None:
                exercise_ids.add(match.id)
        return [log for log in document.logs if log.exercise_id in exercise_ids]

    # ------------------------------------------------------------------
    # Sets
    # ------------------------------------------------------------------

    async def add_set(
        self,
        user: User,
        exercise_id: str,
        weight: Union[int, float],
        reps: int,
        date: Optional[str] = None,
    ) -> SaveResult:
        """
        Record a set, merging into the day's log for this user and exercise.

        Args:
            user: Who did the set
            exercise_id: Exercise from the user's catalog
            weight: Load lifted
            reps: Repetitions
            date: Day of the workout (YYYY-MM-DD), defaults to today
        """
        date = date or local_iso_date()
        document = await self.coordinator.load()

        workout_set = WorkoutSet(id=new_id(), weight=weight, reps=reps, timestamp=now_millis())

        log = next(
            (
                entry for entry in document.logs
                if entry.user == user and entry.exercise_id == exercise_id and entry.date == date
            ),
            None,
        )
        if log is not None:
            log.sets.append(workout_set)
        else:
            document.logs.append(
                WorkoutLog(
                    id=new_id(),
                    exercise_id=exercise_id,
                    user=user,
                    date=date,
                    sets=[workout_set],
                )
            )
            logger.debug("Started %s log for %s on %s", user.value, exercise_id, date)

        return await self.coordinator.save(document)

    async def delete_set(self, log_id: str, set_id: str) -> Optional[SaveResult]:
        """
        Delete a set; the log goes too once it has no sets left.

        Returns:
            The save result, or None when log_id does not exist (nothing saved)
        """
        document = await self.coordinator.load()
        log = document.find_log(log_id)
        if log is None:
            return None

        log.sets = [s for s in log.sets if s.id != set_id]
        if not log.sets:
            document.logs = [entry for entry in document.logs if entry.id != log_id]

        return await self.coordinator.save(document)
