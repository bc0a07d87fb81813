class RowMapError(Exception):
    """
    Base class for every error raised by sqlalchemy_rowmap.
    """


class ConnectivityError(RowMapError):
    pass


class SchemaError(RowMapError):
    pass


class QueryError(RowMapError):
    pass


class ConstraintViolationError(QueryError):
    """
    An insert was rejected by a storage constraint (NOT NULL, FOREIGN KEY, ...).

    ``applied`` maps batch names to the number of rows that were committed
    before the failing batch. It is empty when nothing was kept.
    """
    def __init__(self, message, applied=None):
        super().__init__(message)
        self.applied = dict(applied or {})


class MappingError(RowMapError):
    """
    A result row could not be decoded into the destination record.
    """
