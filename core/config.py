# core/config.py

"""
Runtime settings for the grade dashboard core.

Settings are class attributes read from the environment once at import time, grouped per
environment the same way the hosting application selects them:
- `Config`: shared defaults.
- `DevelopmentConfig`: verbose logging for local runs.
- `TestingConfig`: tight what-if search bounds so runaway searches fail fast in tests.

Environment variables:
- GRADES_ENV: which entry of `config` `get_config()` returns when no name is given.
- GRADES_SEARCH_MAX_NODES: node budget for one what-if search.
- GRADES_SEARCH_TIMEOUT: wall-clock budget, in seconds, for one what-if search.
- GRADES_LOG_LEVEL: root log level used by `configure_logging()`.
- GRADES_SAVE_PATH: default file the CLI writes the normalized model to.
"""

from __future__ import annotations

import logging
import os


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except ValueError:
        return default


class Config:
    SEARCH_MAX_NODES = _env_int("GRADES_SEARCH_MAX_NODES", 100_000)
    SEARCH_TIMEOUT = _env_float("GRADES_SEARCH_TIMEOUT", 5.0)

    LOG_LEVEL = os.environ.get("GRADES_LOG_LEVEL", "WARNING").upper()
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    SAVE_PATH = os.environ.get(
        "GRADES_SAVE_PATH",
        os.path.join(os.path.expanduser("~"), "Documents", "Grades", "grades.json"),
    )


class DevelopmentConfig(Config):
    LOG_LEVEL = os.environ.get("GRADES_LOG_LEVEL", "DEBUG").upper()


class TestingConfig(Config):
    SEARCH_MAX_NODES = 5_000
    SEARCH_TIMEOUT = 1.0


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "default": Config,
}


def get_config(name: str | None = None) -> type[Config]:
    """
    Returns the settings class for an environment name.

    Args:
        name (str | None): A key of `config`. Defaults to GRADES_ENV, then "default".

    Returns:
        The matching `Config` subclass. Unknown names fall back to `Config`.
    """
    name = name or os.environ.get("GRADES_ENV", "default")
    return config.get(name, Config)


def configure_logging(settings: type[Config] | None = None) -> None:
    """
    Installs a root stream handler at the configured level.

    Notes:
        - Safe to call more than once; `logging.basicConfig()` leaves existing handlers alone.
        - Unknown level names fall back to WARNING.
    """
    settings = settings or get_config()
    level = getattr(logging, settings.LOG_LEVEL, logging.WARNING)

    logging.basicConfig(level=level, format=settings.LOG_FORMAT)
