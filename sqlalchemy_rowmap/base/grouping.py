from ..helpers.utils import filter_map, group_by, map_values
from ..logger import logger
from .rows import UserPostRow


def _by_user(item):
    return item.user_id


def group_posts_by_user(rows):
    """
    Filter-then-group: drop rows without a post, then group posts by user id.

    Users with zero posts never produce a post, so they are *not* keys of the
    result. Use :func:`complete_user_posts` to get an entry for every user.
    """
    posts = filter_map(rows, UserPostRow.to_post)
    grouped = group_by(posts, _by_user)
    logger.debug(f"Grouped {len(posts)} posts under {len(grouped)} users")
    return grouped


def group_rows_by_user(rows):
    """
    Group-then-filter: group every flat row by user id, then lift each bucket.

    Every user present in ``rows`` is a key. A user without posts has a single
    all-NULL row, which is filtered out of its bucket and leaves ``[]``.
    """
    grouped = group_by(rows, _by_user)
    result = map_values(grouped, lambda bucket, _: filter_map(bucket, UserPostRow.to_post))
    logger.debug(f"Grouped {len(rows)} rows under {len(result)} users")
    return result


def complete_user_posts(users, grouped):
    return {user.id: list(grouped.get(user.id, [])) for user in users}
