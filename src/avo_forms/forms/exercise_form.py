"""Exercise logging forms: the log editor, reps range sheet, steps and quick add."""

import logging
from dataclasses import dataclass
from datetime import date

from ..clients.base import BackendClient
from ..constraints import (
    EXERCISE_NAME_MAX_LEN,
    NOTES_MAX_LEN,
    QUICK_ADD_COOLDOWN_SECONDS,
    Field,
    bounds_for,
)
from ..models.exercise_log import ExerciseCategory, ExerciseLog, ExerciseLogDraft, Intensity
from ..models.measurement import DistanceUnit
from ..validation.errors import RangeError
from ..validation.input_filters import filter_bounded_integer
from ..validation.ranges import parse_number, validate, validate_text_length
from ..validation.units import distance_for_storage
from .base import CancellationToken, Form, KeyedCooldown

logger = logging.getLogger(__name__)

REPS_PRESETS = [(6, 10), (8, 12), (10, 15), (15, 20)]


def _optional(field: Field, text: str | None) -> int | float | None:
    if text is None or not str(text).strip():
        return None
    return validate(field, text)


def validate_reps_range(reps_min: str | None, reps_max: str | None) -> tuple[int | None, int | None]:
    """Each bound is optional and 1..100; when both are set, min <= max."""
    low = _optional(Field.EXERCISE_REPS, reps_min)
    high = _optional(Field.EXERCISE_REPS, reps_max)
    if low is not None and high is not None and low > high:
        bounds = bounds_for(Field.EXERCISE_REPS)
        raise RangeError(
            "reps_min", "Minimum reps cannot exceed maximum reps", bounds.min, bounds.max
        )
    return low, high


@dataclass
class ExerciseDraft:
    """Exercise fields as typed. Distance is entered in ``distance_unit``."""

    name: str = ""
    category: ExerciseCategory = ExerciseCategory.CARDIO_MIND_BODY
    minutes: str = ""
    distance: str = ""
    distance_unit: DistanceUnit = DistanceUnit.KM
    sets: str = ""
    reps_min: str = ""
    reps_max: str = ""
    intensity: Intensity | None = None
    notes: str = ""

    def set_minutes(self, text: str) -> None:
        self.minutes = filter_bounded_integer(text, Field.EXERCISE_MINUTES, self.minutes)

    def set_sets(self, text: str) -> None:
        self.sets = filter_bounded_integer(text, Field.EXERCISE_SETS, self.sets)


class ExerciseForm(Form[ExerciseLogDraft, ExerciseLog]):
    """Creates a new log for ``log_date`` or, given ``log_id``, updates one.

    Only the current category's fields are validated; the payload nulls the
    other category's fields.
    """

    def __init__(
        self,
        backend: BackendClient,
        user_id: str,
        log_date: date,
        draft: ExerciseDraft | None = None,
        log_id: int | None = None,
        token: CancellationToken | None = None,
    ):
        super().__init__(backend, token)
        self.user_id = user_id
        self.log_date = log_date
        self.draft = draft or ExerciseDraft()
        self.log_id = log_id

    @property
    def is_update(self) -> bool:
        return self.log_id is not None

    def build_payload(self) -> ExerciseLogDraft:
        d = self.draft
        name = validate_text_length("name", d.name, EXERCISE_NAME_MAX_LEN, required=True)
        log = ExerciseLogDraft(name=name, category=d.category)

        if d.category is ExerciseCategory.CARDIO_MIND_BODY:
            log.minutes = _optional(Field.EXERCISE_MINUTES, d.minutes)
            if d.distance.strip():
                entered = parse_number("distance_km", d.distance, "Distance")
                log.distance_km = validate(
                    Field.EXERCISE_DISTANCE_KM, distance_for_storage(entered, d.distance_unit)
                )
        else:
            log.sets = _optional(Field.EXERCISE_SETS, d.sets)
            log.reps_min, log.reps_max = validate_reps_range(d.reps_min, d.reps_max)
            log.intensity = d.intensity

        log.notes = validate_text_length("notes", d.notes, NOTES_MAX_LEN)
        return log

    async def send(self, payload: ExerciseLogDraft) -> ExerciseLog:
        if self.is_update:
            return await self.backend.update_exercise_log(
                self.user_id, self.log_id, payload.to_payload()
            )
        return await self.backend.create_exercise_log(self.user_id, self.log_date, payload.to_payload())


class RepsRangeForm(Form[tuple, tuple]):
    """Bottom sheet for a strength log's reps range.

    Saving hands the range back to the caller; there is no backend call.
    """

    timeout = None

    def __init__(self, reps_min: int | None = None, reps_max: int | None = None,
                 token: CancellationToken | None = None):
        super().__init__(backend=None, token=token)
        self.reps_min = "" if reps_min is None else str(reps_min)
        self.reps_max = "" if reps_max is None else str(reps_max)

    def apply_preset(self, index: int) -> None:
        low, high = REPS_PRESETS[index]
        self.reps_min, self.reps_max = str(low), str(high)

    def clear(self) -> None:
        self.reps_min = self.reps_max = ""

    def build_payload(self) -> tuple:
        return validate_reps_range(self.reps_min, self.reps_max)

    async def send(self, payload: tuple) -> tuple:
        return payload


class StepsForm(Form[int, int]):
    """Daily step count. Typing above the max clamps to the max."""

    def __init__(self, backend: BackendClient, user_id: str, log_date: date, steps: str = "",
                 token: CancellationToken | None = None):
        super().__init__(backend, token)
        self.user_id = user_id
        self.log_date = log_date
        self.steps = steps

    def type_steps(self, text: str) -> str:
        self.steps = filter_bounded_integer(text, Field.STEPS, self.steps)
        return self.steps

    def build_payload(self) -> int:
        return validate(Field.STEPS, self.steps)

    async def send(self, payload: int) -> int:
        return await self.backend.save_daily_steps(self.user_id, self.log_date, payload)


class QuickAdd:
    """One-tap exercise chips.

    A chip is keyed by name and minutes and stays disabled for a few seconds
    after a tap, so repeated taps do not create duplicate logs.
    """

    def __init__(
        self,
        backend: BackendClient,
        user_id: str,
        log_date: date,
        cooldown: KeyedCooldown | None = None,
        token: CancellationToken | None = None,
    ):
        self.backend = backend
        self.user_id = user_id
        self.log_date = log_date
        self.cooldown = cooldown or KeyedCooldown(QUICK_ADD_COOLDOWN_SECONDS)
        self.token = token or CancellationToken()

    @staticmethod
    def chip_key(name: str, minutes: int | None) -> str:
        return f"{name}-{minutes}"

    def is_disabled(self, name: str, minutes: int | None = None) -> bool:
        return self.cooldown.is_blocked(self.chip_key(name, minutes))

    async def add(
        self,
        name: str,
        minutes: int | None = None,
        category: ExerciseCategory = ExerciseCategory.CARDIO_MIND_BODY,
    ) -> ExerciseForm | None:
        """Submit a chip. Returns None when the chip is cooling down."""
        if not self.cooldown.trigger(self.chip_key(name, minutes)):
            logger.debug("Quick add %r ignored during cooldown", name)
            return None
        draft = ExerciseDraft(
            name=name.strip(),
            category=category,
            minutes="" if minutes is None else str(minutes),
        )
        form = ExerciseForm(self.backend, self.user_id, self.log_date, draft=draft, token=self.token)
        await form.submit()
        return form

    def close(self) -> None:
        self.token.cancel()
