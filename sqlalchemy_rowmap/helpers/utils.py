from collections import defaultdict


def filter_map(items, fn):
    """
    Apply ``fn`` to every item and keep the results that are not ``None``.

    Filtering and transforming happen in the same pass, so ``fn`` decides both
    whether an item contributes and what it contributes.
    """
    results = []
    for item in items:
        value = fn(item)
        if value is not None:
            results.append(value)
    return results


def group_by(items, key):
    """
    Partition ``items`` into a dict of ``key(item) -> [items...]``.

    Keys appear in first-seen order and every bucket keeps the input order.
    """
    groups = defaultdict(list)
    for item in items:
        groups[key(item)].append(item)
    return dict(groups)


def map_values(mapping, fn):
    return {k: fn(v, k) for k, v in mapping.items()}
