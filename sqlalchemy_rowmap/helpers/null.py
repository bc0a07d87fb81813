from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from ..exceptions import MappingError

T = TypeVar("T")


@dataclass(frozen=True)
class Null(Generic[T]):
    """
    Presence wrapper for a single nullable column value.

    ``valid`` tells whether the column held a value at all, so a NULL read
    from storage is never confused with a legitimately falsy value.
    """
    value: Optional[T] = None
    valid: bool = False

    @classmethod
    def of(cls, value):
        if value is None:
            return cls()
        return cls(value, True)

    def get(self):
        if not self.valid:
            raise MappingError("Value is NULL")
        return self.value

    def __repr__(self):
        return f"Null({self.value!r})" if self.valid else "Null()"
