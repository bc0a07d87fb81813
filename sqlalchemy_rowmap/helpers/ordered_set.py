from collections import OrderedDict


class OrderedSet:
    """
    Set that remembers insertion order. Used to de-duplicate id lists
    without reordering them.
    """
    def __init__(self, items=()):
        self._data = OrderedDict()
        for item in items:
            self.add(item)

    def add(self, item):
        self._data[item] = None

    def __contains__(self, item):
        return item in self._data

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def __bool__(self):
        return bool(self._data)

    def __repr__(self):
        return f"OrderedSet({list(self._data)!r})"
