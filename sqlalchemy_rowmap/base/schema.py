from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import SchemaError
from ..logger import logger
from .models import Base


def init_schema(engine, metadata=None):
    """
    Drop and recreate the ``users`` and ``posts`` tables.

    Destructive: any existing rows are lost. Tables are dropped in reverse
    foreign key order and created in dependency order.
    """
    metadata = metadata if metadata is not None else Base.metadata

    try:
        metadata.drop_all(engine, checkfirst=True)
        metadata.create_all(engine)
    except SQLAlchemyError as err:
        raise SchemaError(f"Could not create tables: {err}") from err

    logger.info("Created tables")
