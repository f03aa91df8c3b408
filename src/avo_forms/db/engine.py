"""Database engine setup and initialization."""

from pathlib import Path

import aiosqlite

from ..config import get_settings


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    settings = get_settings()
    if data_dir is None:
        data_dir = settings.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / settings.db_name


async def _run_migrations(db: aiosqlite.Connection) -> None:
    """Run database migrations for schema updates."""
    # Databases created before distance preferences existed
    cursor = await db.execute("PRAGMA table_info(profiles)")
    columns = await cursor.fetchall()
    profile_columns = {col[1] for col in columns}

    if "distance_unit" not in profile_columns:
        await db.execute("ALTER TABLE profiles ADD COLUMN distance_unit TEXT NOT NULL DEFAULT 'km'")

    await db.commit()


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema.

    CHECK constraints mirror the bounds in ``avo_forms.constraints`` so the
    stored values can never leave their documented ranges.
    """
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        await db.execute("""
            CREATE TABLE IF NOT EXISTS accounts (
                user_id TEXT PRIMARY KEY,
                email TEXT UNIQUE NOT NULL,
                password_hash TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS profiles (
                user_id TEXT PRIMARY KEY,
                first_name TEXT,
                date_of_birth TEXT,
                height_cm REAL CHECK (height_cm IS NULL OR height_cm BETWEEN 50 AND 304.8),
                weight_lb REAL CHECK (weight_lb IS NULL OR weight_lb BETWEEN 45 AND 1200),
                height_unit TEXT NOT NULL DEFAULT 'cm',
                weight_unit TEXT NOT NULL DEFAULT 'lb',
                distance_unit TEXT NOT NULL DEFAULT 'km',
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercise_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                date TEXT NOT NULL,
                name TEXT NOT NULL CHECK (length(name) BETWEEN 1 AND 30),
                category TEXT NOT NULL CHECK (category IN ('cardio_mind_body', 'strength')),
                minutes INTEGER CHECK (minutes IS NULL OR minutes BETWEEN 0 AND 999),
                distance_km REAL CHECK (distance_km IS NULL OR distance_km BETWEEN 0 AND 999),
                sets INTEGER CHECK (sets IS NULL OR sets BETWEEN 0 AND 999),
                reps_min INTEGER CHECK (reps_min IS NULL OR reps_min BETWEEN 1 AND 100),
                reps_max INTEGER CHECK (reps_max IS NULL OR reps_max BETWEEN 1 AND 100),
                intensity TEXT CHECK (intensity IS NULL OR intensity IN ('low', 'medium', 'high', 'max')),
                notes TEXT CHECK (notes IS NULL OR length(notes) <= 200),
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS daily_steps (
                user_id TEXT NOT NULL,
                date TEXT NOT NULL,
                steps INTEGER NOT NULL CHECK (steps BETWEEN 0 AND 150000),
                PRIMARY KEY (user_id, date)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS friend_requests (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                requester_user_id TEXT NOT NULL,
                target_user_id TEXT,
                target_email TEXT,
                target_handle TEXT,
                requested_via TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'pending',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_log_user_date
            ON exercise_log(user_id, date)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_friend_requests_requester
            ON friend_requests(requester_user_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_friend_requests_target
            ON friend_requests(target_user_id)
        """)

        await db.commit()

        # Run migrations for existing databases
        await _run_migrations(db)
