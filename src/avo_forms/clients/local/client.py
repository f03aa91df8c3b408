"""SQLite-backed stand-in for the hosted database."""

import logging
from datetime import date
from pathlib import Path

import aiosqlite

from ...db.engine import get_db_path, init_db
from ...db.repositories import (
    AccountRepository,
    ExerciseLogRepository,
    FriendRequestRepository,
    ProfileRepository,
    StepsRepository,
)
from ...models.exercise_log import ExerciseLog
from ...models.friends import RequestedVia
from ...models.profile import Profile
from ...validation.errors import BackendError

logger = logging.getLogger(__name__)


class LocalBackendClient:
    """Backend collaborator over a local SQLite file.

    Use as an async context manager, or call ``start()`` before the first
    request. Database errors surface as ``BackendError`` carrying the
    database message, and rows that do not match their record shape are
    rejected rather than coerced.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()
        self.accounts = AccountRepository(self.db_path)
        self.profiles = ProfileRepository(self.db_path)
        self.exercise_logs = ExerciseLogRepository(self.db_path)
        self.steps = StepsRepository(self.db_path)
        self.friend_requests = FriendRequestRepository(self.db_path)
        self._started = False

    async def start(self) -> None:
        if not self._started:
            await init_db(self.db_path)
            self._started = True
            logger.debug("Local backend ready at %s", self.db_path)

    async def close(self) -> None:
        self._started = False

    async def __aenter__(self) -> "LocalBackendClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def sign_up(self, email: str, password: str) -> str:
        await self.start()
        try:
            user_id = await self.accounts.create(email, password)
            await self.profiles.upsert(user_id, {})
        except aiosqlite.IntegrityError:
            raise BackendError(
                "This email is already registered. Please try logging in instead.", status=409
            ) from None
        except aiosqlite.Error as e:
            raise BackendError(str(e)) from e
        logger.info("Registered account %s", user_id)
        return user_id

    async def get_profile(self, user_id: str) -> Profile | None:
        return await self._call(self.profiles.get(user_id))

    async def update_profile(self, user_id: str, payload: dict) -> Profile:
        return await self._call(self.profiles.upsert(user_id, payload))

    async def create_exercise_log(self, user_id: str, log_date: date, payload: dict) -> ExerciseLog:
        return await self._call(self.exercise_logs.create(user_id, log_date, payload))

    async def update_exercise_log(self, user_id: str, log_id: int, payload: dict) -> ExerciseLog:
        log = await self._call(self.exercise_logs.update(user_id, log_id, payload))
        if log is None:
            raise BackendError(f"Exercise log {log_id} not found", status=404)
        return log

    async def list_exercise_logs(self, user_id: str, log_date: date) -> list[ExerciseLog]:
        return await self._call(self.exercise_logs.list_for_date(user_id, log_date))

    async def save_daily_steps(self, user_id: str, log_date: date, steps: int) -> int:
        return await self._call(self.steps.upsert(user_id, log_date, steps))

    async def get_daily_steps(self, user_id: str, log_date: date) -> int | None:
        return await self._call(self.steps.get(user_id, log_date))

    async def send_friend_request(self, user_id: str, target: str) -> int:
        """Store a pending request and return its ID.

        Email targets are matched to an account when one is registered, so
        they show up in that account's incoming list. There is no handle
        directory here: handle requests are outgoing-only and never have a
        target user.
        """
        target = target.strip()
        if "@" in target:
            email = target.lower()
            account = await self._call(self.accounts.get_by_email(email))
            return await self._call(
                self.friend_requests.create(
                    user_id,
                    RequestedVia.EMAIL.value,
                    target_email=email,
                    target_user_id=account["user_id"] if account else None,
                )
            )
        return await self._call(
            self.friend_requests.create(user_id, RequestedVia.HANDLE.value, target_handle=target)
        )

    async def list_outgoing_friend_requests(self, user_id: str) -> list[dict]:
        return await self._call(self.friend_requests.list_outgoing(user_id))

    async def list_incoming_friend_requests(self, user_id: str) -> list[dict]:
        return await self._call(self.friend_requests.list_incoming(user_id))

    async def _call(self, operation):
        """Await a repository call, translating failures to BackendError."""
        await self.start()
        try:
            return await operation
        except aiosqlite.Error as e:
            logger.warning("Backend call failed: %s", e)
            raise BackendError(str(e)) from e
        except ValueError as e:
            logger.warning("Backend returned an unexpected row: %s", e)
            raise BackendError(f"Unexpected response: {e}") from e
