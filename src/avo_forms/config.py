"""Runtime settings read from the environment."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

# Default data directory
DATA_DIR = Path(__file__).parent.parent.parent / "data"
DB_NAME = "avo_forms.db"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Settings for the CLI, the web service and the local backend."""

    data_dir: Path = DATA_DIR
    db_name: str = DB_NAME
    log_level: str = "WARNING"

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings, letting AVO_* environment variables override defaults."""
        data_dir = os.environ.get("AVO_DATA_DIR")
        return cls(
            data_dir=Path(data_dir) if data_dir else DATA_DIR,
            db_name=os.environ.get("AVO_DB_NAME", DB_NAME),
            log_level=os.environ.get("AVO_LOG_LEVEL", "WARNING").upper(),
        )


def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(level: str | int) -> None:
    """Configure root logging once for CLI and server entry points."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("avo_forms").setLevel(level)
