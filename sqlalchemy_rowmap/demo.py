"""
Run every users/posts demonstration in order against a throwaway SQLite file.

    python -m sqlalchemy_rowmap.demo

The database at ``Config.url`` is dropped and recreated on every run. Any
error is logged and ends the process with status 1.
"""
import logging
import sys

from .base.engine import connect, session_factory
from .base.grouping import group_posts_by_user, group_rows_by_user
from .base.models import User, Post
from .base.schema import init_schema
from .config import Config
from .exceptions import RowMapError
from .logger import logger

USERS = [
    User(name="Alice"),
    User(name="Bob"),
    User(name="Charlie"),
]

# Alice has 2 posts, Bob has 1 post, Charlie has none
POSTS = [
    dict(user_id=1, content="Hello, Alice"),
    dict(user_id=1, content="Nice to meet you"),
    dict(user_id=2, content="Hello, Bob"),
]


def run(Session):
    with Session() as session:
        inserted = session.bulk_insert(USERS, POSTS)
        logger.info(f"Insert users: {inserted.users}")
        logger.info(f"Insert posts: {inserted.posts}")

    with Session() as session:
        users = session.select_users()
        logger.info(f"All users: {users}")

        selected = session.select_users_by_ids([1, 2])
        logger.info(f"Selected users: {selected}")

        joined = session.select_user_posts()
        logger.info(f"Joined result: {joined}")

        rows = session.select_flat_user_posts()

        # every user is a key, users without posts map to []
        logger.info(f"User posts: {group_rows_by_user(rows)}")

        # same as the INNER JOIN: users without posts are absent
        logger.info(f"User posts: {group_posts_by_user(rows)}")

    return dict(
        inserted=inserted,
        users=users,
        selected=selected,
        joined=joined,
        rows=rows,
    )


def main(config=None):
    config = config or Config.from_env()
    logging.basicConfig(level=config.log_level, format="%(asctime)s %(levelname)s %(message)s")

    try:
        engine = connect(config)
    except RowMapError:
        logger.exception("Could not open the database")
        return 1

    try:
        init_schema(engine)
        run(session_factory(engine, config))
    except RowMapError:
        logger.exception("Demo failed")
        return 1
    finally:
        engine.dispose()

    return 0


if __name__ == "__main__":
    sys.exit(main())
