from collections.abc import Mapping
from contextlib import contextmanager
from typing import NamedTuple

from sqlalchemy import insert, select
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session

from ..config import Config
from ..exceptions import ConstraintViolationError, QueryError
from ..helpers.ordered_set import OrderedSet
from ..logger import logger
from .mapping import ColumnMap, UserPost
from .models import User, Post
from .rows import UserPostRow


class BulkInsertResult(NamedTuple):
    users: int
    posts: int
    user_ids: list
    post_ids: list


@contextmanager
def _translate_errors(action, applied=None):
    try:
        yield
    except IntegrityError as err:
        raise ConstraintViolationError(f"{action} failed: {err.orig}", applied=applied) from err
    except DBAPIError as err:
        raise QueryError(f"{action} failed: {err.orig}") from err


class RowMapSession(Session):
    def __init__(self, *args, config=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.config = config or Config()

    @staticmethod
    def _as_values(model, record):
        if isinstance(record, Mapping):
            unknown = set(record) - set(model.__table__.columns.keys())
            if unknown:
                raise TypeError(f"Unknown {model.__name__} columns: {', '.join(sorted(unknown))}")
            return dict(record)

        if not isinstance(record, model):
            raise TypeError(f"Expected {model.__name__} or a mapping, got {type(record).__name__}")

        values = {}
        for column in model.__table__.columns:
            value = getattr(record, column.key)
            if column.primary_key and value is None:
                continue
            values[column.key] = value
        return values

    def _insert_batch(self, model, records):
        """
        Insert ``records`` with one batched statement and return the new ids.
        """
        params = [self._as_values(model, r) for r in records]
        if not params:
            return []

        tablename = model.__tablename__
        logger.debug(f"Inserting {len(params)} rows into '{tablename}'")

        stmt = insert(model).returning(model.id, sort_by_parameter_order=True)
        return list(self.scalars(stmt, params).all())

    def bulk_insert(self, users, posts):
        """
        Insert ``users`` then ``posts``, one batched statement each.

        Users go first so that the posts can reference their generated ids.
        With ``config.atomic_bulk_insert`` both batches share a transaction and
        a failure leaves the tables untouched. Otherwise each batch commits on
        its own, and a failing posts batch raises with ``applied`` telling how
        many users were kept.
        """
        if self.in_transaction():
            raise QueryError("bulk_insert() runs its own transaction, commit or roll back the session first")

        users = list(users)
        posts = list(posts)

        if self.config.atomic_bulk_insert:
            with _translate_errors("Bulk insert"):
                with self.begin():
                    user_ids = self._insert_batch(User, users)
                    post_ids = self._insert_batch(Post, posts)

        else:
            with _translate_errors("Insert users"):
                with self.begin():
                    user_ids = self._insert_batch(User, users)

            with _translate_errors("Insert posts", applied={"users": len(user_ids)}):
                with self.begin():
                    post_ids = self._insert_batch(Post, posts)

        return BulkInsertResult(len(user_ids), len(post_ids), user_ids, post_ids)

    def _fetch(self, statement, action="Query"):
        with _translate_errors(action):
            return self.execute(statement).all()

    def select_users(self):
        with _translate_errors("Select users"):
            return self.scalars(select(User)).all()

    def select_users_by_ids(self, ids):
        """
        Return the users whose id is in ``ids``, ordered by id.

        The ids are bound as an expanding parameter, never formatted into the
        SQL text. An empty ``ids`` returns ``[]`` without querying.
        """
        ids = OrderedSet(ids)
        if not ids:
            logger.debug("Empty id set, no users selected")
            return []

        stmt = select(User).where(User.id.in_(list(ids))).order_by(User.id)
        with _translate_errors("Select users by id"):
            return self.scalars(stmt).all()

    def _user_posts_statement(self, column_map, isouter):
        return (
            select(*column_map.columns())
            .join_from(User, Post, User.id == Post.user_id, isouter=isouter)
            .order_by(User.id, Post.id)
        )

    def select_user_posts(self):
        """
        INNER JOIN users and posts into ``UserPost(user, post)`` pairs.
        """
        column_map = ColumnMap(user=User, post=Post)
        rows = self._fetch(self._user_posts_statement(column_map, isouter=False), "Join users and posts")
        return [column_map.load_as(row, UserPost) for row in rows]

    def select_user_posts_outer(self):
        """
        LEFT JOIN variant of :meth:`select_user_posts`.

        Raises :class:`MappingError` as soon as a user has no post, because the
        post side of that row is NULL and ``Post`` fields are required. Use
        :meth:`select_flat_user_posts` and the grouping helpers instead.
        """
        column_map = ColumnMap(user=User, post=Post)
        rows = self._fetch(self._user_posts_statement(column_map, isouter=True), "Left join users and posts")
        return [column_map.load_as(row, UserPost) for row in rows]

    def select_flat_user_posts(self):
        stmt = (
            select(
                User.id.label("user_id"),
                Post.id.label("post_id"),
                Post.content.label("content"),
            )
            .join_from(User, Post, User.id == Post.user_id, isouter=True)
            .order_by(User.id, Post.id)
        )
        rows = self._fetch(stmt, "Select flat user posts")
        return [UserPostRow.from_row(row) for row in rows]
