from typing import NamedTuple

from ..exceptions import MappingError
from ..helpers.null import Null
from .models import Post


class UserPostRow(NamedTuple):
    """
    One row of ``users LEFT JOIN posts`` before any grouping.

    ``user_id`` is always present. The post columns are wrapped one by one,
    since a user without posts yields a row where all of them are NULL.
    """
    user_id: int
    post_id: Null
    content: Null

    @classmethod
    def from_row(cls, row):
        mapping = row._mapping
        try:
            user_id = mapping["user_id"]
            post_id = mapping["post_id"]
            content = mapping["content"]
        except KeyError as err:
            raise MappingError(f"Row is missing column {err}") from None

        if user_id is None:
            raise MappingError("NULL value for required field 'user_id'")

        return cls(user_id, Null.of(post_id), Null.of(content))

    def to_post(self):
        """
        Lift the row into a ``Post``, or return ``None`` when it has no post.
        """
        if not self.post_id.valid:
            return None

        return Post(id=self.post_id.get(), user_id=self.user_id, content=self.content.get())
