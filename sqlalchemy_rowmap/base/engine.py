from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from ..config import Config
from ..events import register_events
from ..exceptions import ConnectivityError
from ..logger import logger
from .session import RowMapSession


def connect(config=None):
    """
    Create the engine for ``config.url`` and make sure it can be reached.

    The returned engine is the process-wide storage handle; callers own it and
    are expected to ``dispose()`` it once they are done.
    """
    config = config or Config()

    try:
        engine = create_engine(config.url, echo=config.echo)
    except (SQLAlchemyError, ValueError) as err:
        raise ConnectivityError(f"Invalid database URL {config.url!r}: {err}") from err

    register_events(engine, config)

    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as err:
        engine.dispose()
        raise ConnectivityError(f"Could not connect to {engine.url!r}: {err}") from err

    logger.info("Connected to the database")
    return engine


def session_factory(engine, config=None):
    return sessionmaker(
        engine,
        class_=RowMapSession,
        expire_on_commit=False,
        config=config or Config(),
    )
