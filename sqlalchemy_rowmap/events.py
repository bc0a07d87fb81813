from sqlalchemy import event

from .logger import logger


def register_events(engine, config):
    @event.listens_for(engine, "connect")
    def _sqlite_on_connect(dbapi_connection, connection_record):
        # SQLite leaves foreign key enforcement off unless asked, per connection
        if engine.dialect.name != "sqlite" or not config.foreign_keys:
            return

        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys = ON")
        finally:
            cursor.close()

    @event.listens_for(engine, "before_cursor_execute")
    def _log_statement(conn, cursor, statement, parameters, context, executemany):
        logger.debug(f"Executing {' '.join(statement.split())} with {parameters!r}")
