"""Base protocol for the backend collaborator."""

from datetime import date
from typing import Protocol, runtime_checkable

from ..models.exercise_log import ExerciseLog
from ..models.profile import Profile


@runtime_checkable
class BackendClient(Protocol):
    """Remote calls that forms gate behind validation.

    Every method raises ``BackendError`` on failure. Clients are constructed
    explicitly and passed to the forms that use them.
    """

    async def sign_up(self, email: str, password: str) -> str:
        """Register an account and return its user ID."""
        ...

    async def get_profile(self, user_id: str) -> Profile | None:
        ...

    async def update_profile(self, user_id: str, payload: dict) -> Profile:
        """Apply a validated profile payload (canonical units)."""
        ...

    async def create_exercise_log(self, user_id: str, log_date: date, payload: dict) -> ExerciseLog:
        ...

    async def update_exercise_log(self, user_id: str, log_id: int, payload: dict) -> ExerciseLog:
        """Update one of the user's logs. Raises BackendError (404) for any other log."""
        ...

    async def list_exercise_logs(self, user_id: str, log_date: date) -> list[ExerciseLog]:
        ...

    async def save_daily_steps(self, user_id: str, log_date: date, steps: int) -> int:
        ...

    async def get_daily_steps(self, user_id: str, log_date: date) -> int | None:
        ...

    async def send_friend_request(self, user_id: str, target: str) -> int:
        """Send a request by email address or handle."""
        ...

    async def list_outgoing_friend_requests(self, user_id: str) -> list[dict]:
        ...

    async def list_incoming_friend_requests(self, user_id: str) -> list[dict]:
        ...
