from typing import NamedTuple

from sqlalchemy.exc import InvalidRequestError

from ..exceptions import MappingError
from .models import User, Post


class UserPost(NamedTuple):
    user: User
    post: Post


class ColumnMap:
    """
    Explicit field-path to column table for decoding joined rows.

    Each entity is registered under a name, and every one of its columns is
    selected under the label ``"<name>.<attribute>"``. Two joined tables that
    both have an ``id`` column therefore come back as ``user.id`` and
    ``post.id`` instead of relying on implicit name matching.

        cmap = ColumnMap(user=User, post=Post)
        stmt = select(*cmap.columns()).join_from(User, Post, User.id == Post.user_id)
        pairs = [cmap.load_as(row, UserPost) for row in session.execute(stmt)]
    """
    def __init__(self, **entities):
        if not entities:
            raise MappingError("ColumnMap needs at least one entity")

        self._entities = dict(entities)
        self._paths = {}

        for name, model in self._entities.items():
            if "." in name:
                raise MappingError(f"Entity name '{name}' cannot contain '.'")

            for column in model.__table__.columns:
                self._paths[f"{name}.{column.key}"] = column

    def paths(self):
        return list(self._paths)

    def column(self, path):
        try:
            return self._paths[path]
        except KeyError:
            raise MappingError(f"Unknown field path '{path}'") from None

    def columns(self):
        """
        Columns to pass to ``select()``, each labeled with its field path.
        """
        return [column.label(path) for path, column in self._paths.items()]

    def _value(self, mapping, keys, path):
        if keys.count(path) > 1:
            raise MappingError(f"Ambiguous column for field path '{path}': selected {keys.count(path)} times")

        try:
            return mapping[path]
        except KeyError:
            raise MappingError(f"Row has no column for field path '{path}'") from None
        except InvalidRequestError as err:
            raise MappingError(f"Ambiguous column for field path '{path}': {err}") from err

    def load(self, row):
        """
        Decode ``row`` into ``{name: model instance}``.

        A NULL in a column declared NOT NULL cannot become a required field and
        raises :class:`MappingError`. This is what happens when the right side
        of a LEFT JOIN is absent.
        """
        mapping = row._mapping
        keys = list(mapping.keys())
        loaded = {}

        for name, model in self._entities.items():
            values = {}
            for column in model.__table__.columns:
                path = f"{name}.{column.key}"
                value = self._value(mapping, keys, path)
                if value is None and not column.nullable:
                    raise MappingError(f"NULL value for required field '{path}'")
                values[column.key] = value

            loaded[name] = model(**values)

        return loaded

    def load_as(self, row, tuple_cls):
        return tuple_cls(**self.load(row))

    def __repr__(self):
        entities = ", ".join(f"{name}={model.__name__}" for name, model in self._entities.items())
        return f"ColumnMap({entities})"
