from .config import Config
from .exceptions import (
    RowMapError,
    ConnectivityError,
    SchemaError,
    ConstraintViolationError,
    QueryError,
    MappingError,
)
from .base.engine import connect, session_factory
from .base.models import Base, User, Post
from .base.schema import init_schema
from .base.session import RowMapSession, BulkInsertResult
from .base.mapping import ColumnMap, UserPost
from .base.rows import UserPostRow
from .base.grouping import group_posts_by_user, group_rows_by_user, complete_user_posts
from .helpers.null import Null

__all__ = [
    "Config",
    "RowMapError",
    "ConnectivityError",
    "SchemaError",
    "ConstraintViolationError",
    "QueryError",
    "MappingError",
    "connect",
    "session_factory",
    "Base",
    "User",
    "Post",
    "init_schema",
    "RowMapSession",
    "BulkInsertResult",
    "ColumnMap",
    "UserPost",
    "UserPostRow",
    "group_posts_by_user",
    "group_rows_by_user",
    "complete_user_posts",
    "Null",
]

__version__ = '0.1.0'
