import logging
import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_URL = "sqlite:///./test.db"

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Config(BaseModel):
    """
    Settings for connecting and running queries.

    Every field has a default, so ``Config()`` is the configuration the demo
    runs with. ``Config.from_env()`` lets ``ROWMAP_*`` variables override it.
    """

    url: str = Field(default=DEFAULT_URL, description="SQLAlchemy database URL")
    echo: bool = Field(default=False, description="Echo emitted SQL through SQLAlchemy's logger")
    foreign_keys: bool = Field(
        default=True,
        description="Issue 'PRAGMA foreign_keys = ON' on every new SQLite connection",
    )
    atomic_bulk_insert: bool = Field(
        default=True,
        description="Insert users and posts in a single transaction (all-or-nothing)",
    )
    log_level: str = Field(default="INFO", description="Level used by the demo's logging setup")

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, v):
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        values = {}

        if environ.get("ROWMAP_DB_URL"):
            values["url"] = environ["ROWMAP_DB_URL"]
        if environ.get("ROWMAP_LOG_LEVEL"):
            values["log_level"] = environ["ROWMAP_LOG_LEVEL"]

        for key, field in (("ROWMAP_ECHO", "echo"), ("ROWMAP_ATOMIC_BULK_INSERT", "atomic_bulk_insert")):
            if key in environ:
                values[field] = environ[key].strip().lower() in _TRUE_VALUES

        return cls(**values)
