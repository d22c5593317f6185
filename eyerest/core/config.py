from __future__ import annotations

"""Application paths and runtime options read from the environment."""

import logging
import os
from pathlib import Path


APP_NAME = "eyerest"
TICK_INTERVAL_MS = 1000

DATA_DIR_ENV = "EYEREST_DATA_DIR"
LOG_LEVEL_ENV = "EYEREST_LOG_LEVEL"


def get_data_dir() -> Path:
    """Returns the directory holding the database and log files, creating it if needed."""
    override = os.environ.get(DATA_DIR_ENV)
    data_dir = Path(override).expanduser() if override else Path.home() / f".{APP_NAME}"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def default_db_path() -> Path:
    return get_data_dir() / f"{APP_NAME}.db"


def log_file_path() -> Path:
    return get_data_dir() / f"{APP_NAME}.log"


def log_level() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO
