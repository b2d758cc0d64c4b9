"""Chart data points built from workout logs."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Union

from ..models.document import User, WorkoutLog
from ..utils.dates import iso_date_to_millis


@dataclass
class ChartDataPoint:
    """One set plotted as weight over time; reps drive the marker size."""
    date: int  # epoch millis of the log date
    formatted_date: str
    weight: Union[int, float]
    reps: int
    user: User

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "formattedDate": self.formatted_date,
            "weight": self.weight,
            "reps": self.reps,
            "user": self.user.value,
        }


def _format_date(iso_date: str) -> str:
    return datetime.strptime(iso_date, "%Y-%m-%d").strftime("%b %d, %Y")


def build_chart_points(logs: Iterable[WorkoutLog]) -> List[ChartDataPoint]:
    """
    Flatten logs into one point per set, ordered by day then set time.

    Logs whose date is not a valid ISO date cannot be placed on the time
    axis and are skipped.
    """
    points = []
    ordering = []
    for log in logs:
        try:
            day_millis = iso_date_to_millis(log.date)
            formatted = _format_date(log.date)
        except ValueError:
            continue
        for workout_set in log.sets:
            points.append(
                ChartDataPoint(
                    date=day_millis,
                    formatted_date=formatted,
                    weight=workout_set.weight,
                    reps=workout_set.reps,
                    user=log.user,
                )
            )
            ordering.append((day_millis, workout_set.timestamp))

    return [point for _, point in sorted(zip(ordering, points), key=lambda pair: pair[0])]
