"""Pytest configuration and fixtures."""

import asyncio
import pytest
import tempfile
from datetime import date
from pathlib import Path

from avo_forms.forms.profile_form import ProfileDraft
from avo_forms.forms.registration_form import RegistrationDraft
from avo_forms.models.exercise_log import ExerciseLog
from avo_forms.models.profile import Profile
from avo_forms.validation.errors import BackendError

TODAY = date(2026, 1, 15)


class FakeBackend:
    """In-memory backend that records every call.

    Set ``fail_with`` to make the next calls raise, or ``gate`` to an
    ``asyncio.Event`` to hold calls until it is set.
    """

    def __init__(self):
        self.calls: list[tuple] = []
        self.fail_with: BackendError | None = None
        self.gate: asyncio.Event | None = None
        self.next_log_id = 1

    async def _enter(self, *call):
        self.calls.append(call)
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with

    async def sign_up(self, email, password):
        await self._enter("sign_up", email)
        return "user-1"

    async def get_profile(self, user_id):
        await self._enter("get_profile", user_id)
        return Profile(user_id=user_id)

    async def update_profile(self, user_id, payload):
        await self._enter("update_profile", user_id, payload)
        return Profile(
            user_id=user_id,
            height_cm=payload["height_cm"],
            weight_lb=payload["weight_lb"],
            first_name=payload.get("first_name"),
        )

    async def create_exercise_log(self, user_id, log_date, payload):
        await self._enter("create_exercise_log", user_id, log_date, payload)
        log_id = self.next_log_id
        self.next_log_id += 1
        return ExerciseLog.from_row({"id": log_id, "user_id": user_id, "date": log_date.isoformat(),
                                     "created_at": None, **payload})

    async def update_exercise_log(self, user_id, log_id, payload):
        await self._enter("update_exercise_log", user_id, log_id, payload)
        return ExerciseLog.from_row({"id": log_id, "user_id": user_id, "date": TODAY.isoformat(),
                                     "created_at": None, **payload})

    async def list_exercise_logs(self, user_id, log_date):
        await self._enter("list_exercise_logs", user_id, log_date)
        return []

    async def save_daily_steps(self, user_id, log_date, steps):
        await self._enter("save_daily_steps", user_id, log_date, steps)
        return steps

    async def get_daily_steps(self, user_id, log_date):
        await self._enter("get_daily_steps", user_id, log_date)
        return None

    async def send_friend_request(self, user_id, target):
        await self._enter("send_friend_request", user_id, target)
        return 1

    async def list_outgoing_friend_requests(self, user_id):
        await self._enter("list_outgoing_friend_requests", user_id)
        return []

    async def list_incoming_friend_requests(self, user_id):
        await self._enter("list_incoming_friend_requests", user_id)
        return []

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def fake_backend():
    return FakeBackend()


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def sample_profile_draft():
    """A profile draft that passes validation."""
    return ProfileDraft(
        first_name="Sam",
        date_of_birth="1990-06-01",
        height_cm="180",
        weight="170",
    )


@pytest.fixture
def sample_registration_draft():
    """A registration draft that passes validation."""
    return RegistrationDraft(
        email="someone@example.com",
        password="Tr0ub4dor&9!",
        confirm_password="Tr0ub4dor&9!",
        first_name="Sam",
        date_of_birth="1990-06-01",
        height_cm="180",
        weight="170",
    )
