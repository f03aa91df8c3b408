"""Exercise log data models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum


class ExerciseCategory(str, Enum):
    """Selects which attribute set an exercise log carries."""

    CARDIO_MIND_BODY = "cardio_mind_body"  # minutes, distance
    STRENGTH = "strength"  # sets, reps range, intensity


class Intensity(str, Enum):
    """Perceived effort for strength work."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    MAX = "max"


CARDIO_FIELDS = ("minutes", "distance_km")
STRENGTH_FIELDS = ("sets", "reps_min", "reps_max", "intensity")

PAYLOAD_KEYS = ("name", "category", "notes") + CARDIO_FIELDS + STRENGTH_FIELDS


@dataclass
class ExerciseLogDraft:
    """In-progress exercise entry, in canonical units (distance in km)."""

    name: str
    category: ExerciseCategory
    minutes: int | None = None
    distance_km: float | None = None
    sets: int | None = None
    reps_min: int | None = None
    reps_max: int | None = None
    intensity: Intensity | None = None
    notes: str | None = None

    def to_payload(self) -> dict:
        """Build the backend payload with the other category's fields nulled."""
        payload = {
            "name": self.name,
            "category": self.category.value,
            "notes": self.notes,
            "minutes": self.minutes,
            "distance_km": self.distance_km,
            "sets": self.sets,
            "reps_min": self.reps_min,
            "reps_max": self.reps_max,
            "intensity": self.intensity.value if self.intensity else None,
        }
        irrelevant = STRENGTH_FIELDS if self.category is ExerciseCategory.CARDIO_MIND_BODY else CARDIO_FIELDS
        for key in irrelevant:
            payload[key] = None
        return payload


@dataclass
class ExerciseLog:
    """A stored exercise log row."""

    id: int
    user_id: str
    date: date
    name: str
    category: ExerciseCategory
    minutes: int | None = None
    distance_km: float | None = None
    sets: int | None = None
    reps_min: int | None = None
    reps_max: int | None = None
    intensity: Intensity | None = None
    notes: str | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "date": self.date.isoformat(),
            "name": self.name,
            "category": self.category.value,
            "minutes": self.minutes,
            "distance_km": self.distance_km,
            "sets": self.sets,
            "reps_min": self.reps_min,
            "reps_max": self.reps_max,
            "intensity": self.intensity.value if self.intensity else None,
            "notes": self.notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_row(cls, row) -> "ExerciseLog":
        """Build from a backend row, rejecting unexpected shapes.

        Raises ValueError for a missing column or an unknown category or
        intensity.
        """
        try:
            created_at = row["created_at"]
            return cls(
                id=int(row["id"]),
                user_id=str(row["user_id"]),
                date=date.fromisoformat(str(row["date"])),
                name=row["name"],
                category=ExerciseCategory(row["category"]),
                minutes=row["minutes"],
                distance_km=row["distance_km"],
                sets=row["sets"],
                reps_min=row["reps_min"],
                reps_max=row["reps_max"],
                intensity=Intensity(row["intensity"]) if row["intensity"] else None,
                notes=row["notes"],
                created_at=datetime.fromisoformat(created_at) if created_at else None,
            )
        except (KeyError, IndexError) as e:
            raise ValueError(f"Exercise log row is missing a column: {e}") from e


@dataclass
class DaySummary:
    """Totals shown above the day's exercise list."""

    cardio_minutes: int = 0
    cardio_distance_km: float = 0.0
    cardio_count: int = 0
    strength_count: int = 0
    logs: list[ExerciseLog] = field(default_factory=list)


def sort_logs(logs: list[ExerciseLog]) -> list[ExerciseLog]:
    """Cardio/mind-body first, then strength; newer entries last within each."""
    return sorted(
        logs,
        key=lambda log: (log.category is not ExerciseCategory.CARDIO_MIND_BODY, log.id),
    )


def summarize_day(logs: list[ExerciseLog]) -> DaySummary:
    """Cardio totals and category counts. Strength work has no minutes total."""
    summary = DaySummary(logs=sort_logs(logs))
    for log in logs:
        if log.category is ExerciseCategory.CARDIO_MIND_BODY:
            summary.cardio_count += 1
            summary.cardio_minutes += log.minutes or 0
            if log.distance_km is not None:
                summary.cardio_distance_km += log.distance_km
        else:
            summary.strength_count += 1
    return summary


def format_minutes(total_minutes: int) -> str:
    """Format minutes as e.g. "8h42m", "8h" or "42m"."""
    hours, minutes = divmod(total_minutes, 60)
    if hours and minutes:
        return f"{hours}h{minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"
