"""Data access layer for avo-forms."""

import uuid
from datetime import date
from pathlib import Path

import aiosqlite

from ..models.exercise_log import PAYLOAD_KEYS, ExerciseLog
from ..models.profile import Profile
from .engine import get_db_path
from .security import hash_password

PROFILE_COLUMNS = (
    "first_name",
    "date_of_birth",
    "height_cm",
    "weight_lb",
    "height_unit",
    "weight_unit",
    "distance_unit",
)


class ProfileRepository:
    """Repository for user profiles."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, user_id: str) -> Profile | None:
        """Get a profile by user ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM profiles WHERE user_id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return Profile.from_row(row)

    async def upsert(self, user_id: str, payload: dict) -> Profile | None:
        """Create the profile if missing, then apply the payload columns."""
        columns = [key for key in PROFILE_COLUMNS if key in payload]
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "INSERT OR IGNORE INTO profiles (user_id) VALUES (?)", (user_id,)
            )
            if columns:
                assignments = ", ".join(f"{col} = ?" for col in columns)
                await db.execute(
                    f"UPDATE profiles SET {assignments}, updated_at = CURRENT_TIMESTAMP "
                    "WHERE user_id = ?",
                    (*[payload[col] for col in columns], user_id),
                )
            await db.commit()

        return await self.get(user_id)


class ExerciseLogRepository:
    """Repository for exercise logs."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, user_id: str, log_date: date, payload: dict) -> ExerciseLog | None:
        """Insert a log. ``payload`` must already be category-nulled."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"""
                INSERT INTO exercise_log (user_id, date, {", ".join(PAYLOAD_KEYS)})
                VALUES (?, ?, {", ".join("?" for _ in PAYLOAD_KEYS)})
                """,
                (user_id, log_date.isoformat(), *[payload.get(key) for key in PAYLOAD_KEYS]),
            )
            await db.commit()
            log_id = cursor.lastrowid

        return await self.get(log_id)

    async def update(self, user_id: str, log_id: int, payload: dict) -> ExerciseLog | None:
        """Apply a partial update to one of the user's logs.

        Returns None if the log does not exist or belongs to someone else.
        """
        columns = [key for key in PAYLOAD_KEYS if key in payload]
        if columns:
            assignments = ", ".join(f"{col} = ?" for col in columns)
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute(
                    f"UPDATE exercise_log SET {assignments} WHERE id = ? AND user_id = ?",
                    (*[payload[col] for col in columns], log_id, user_id),
                )
                await db.commit()
        return await self.get(log_id, user_id=user_id)

    async def get(self, log_id: int, user_id: str | None = None) -> ExerciseLog | None:
        query = "SELECT * FROM exercise_log WHERE id = ?"
        params: tuple = (log_id,)
        if user_id is not None:
            query += " AND user_id = ?"
            params = (log_id, user_id)
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(query, params)
            row = await cursor.fetchone()
            if row is None:
                return None
            return ExerciseLog.from_row(row)

    async def list_for_date(self, user_id: str, log_date: date) -> list[ExerciseLog]:
        """List a user's logs for one day, oldest first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM exercise_log
                WHERE user_id = ? AND date = ?
                ORDER BY created_at ASC, id ASC
                """,
                (user_id, log_date.isoformat()),
            )
            rows = await cursor.fetchall()
            return [ExerciseLog.from_row(row) for row in rows]


class StepsRepository:
    """Repository for daily step totals."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def upsert(self, user_id: str, log_date: date, steps: int) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO daily_steps (user_id, date, steps) VALUES (?, ?, ?)
                ON CONFLICT(user_id, date) DO UPDATE SET steps = excluded.steps
                """,
                (user_id, log_date.isoformat(), steps),
            )
            await db.commit()
        return steps

    async def get(self, user_id: str, log_date: date) -> int | None:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT steps FROM daily_steps WHERE user_id = ? AND date = ?",
                (user_id, log_date.isoformat()),
            )
            row = await cursor.fetchone()
            return row[0] if row else None


class AccountRepository:
    """Repository for locally registered accounts."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, email: str, password: str) -> str:
        """Create an account and return its user ID.

        Raises aiosqlite.IntegrityError if the email is already registered.
        """
        user_id = str(uuid.uuid4())
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "INSERT INTO accounts (user_id, email, password_hash) VALUES (?, ?, ?)",
                (user_id, email, hash_password(password)),
            )
            await db.commit()
        return user_id

    async def get_by_email(self, email: str) -> dict | None:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT user_id, email, password_hash, created_at FROM accounts WHERE email = ?",
                (email,),
            )
            row = await cursor.fetchone()
            return dict(row) if row else None


class FriendRequestRepository:
    """Repository for friend requests."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(
        self,
        requester_user_id: str,
        requested_via: str,
        target_email: str | None = None,
        target_handle: str | None = None,
        target_user_id: str | None = None,
    ) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO friend_requests
                (requester_user_id, target_user_id, target_email, target_handle, requested_via)
                VALUES (?, ?, ?, ?, ?)
                """,
                (requester_user_id, target_user_id, target_email, target_handle, requested_via),
            )
            await db.commit()
            return cursor.lastrowid

    async def list_outgoing(self, user_id: str) -> list[dict]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT id, target_user_id, target_email, target_handle, requested_via, created_at
                FROM friend_requests
                WHERE requester_user_id = ? AND status = 'pending'
                ORDER BY created_at DESC, id DESC
                """,
                (user_id,),
            )
            return [dict(row) for row in await cursor.fetchall()]

    async def list_incoming(self, user_id: str) -> list[dict]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT fr.id, fr.requester_user_id, fr.created_at,
                       p.first_name AS requester_first_name,
                       NULL AS requester_handle
                FROM friend_requests fr
                LEFT JOIN profiles p ON p.user_id = fr.requester_user_id
                WHERE fr.target_user_id = ? AND fr.status = 'pending'
                ORDER BY fr.created_at DESC, fr.id DESC
                """,
                (user_id,),
            )
            return [dict(row) for row in await cursor.fetchall()]
