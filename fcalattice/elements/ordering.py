"""Deterministic ordering of heterogeneous items.

Every set-based algorithm in the package iterates in a fixed order. Items can
be numbers, strings, nodes, frozensets of nodes or arbitrary objects, so a
plain ``sorted`` is not enough: mixed types are ranked first, then compared
within their rank.
"""

from numbers import Real
from typing import Any, Iterable, List, Tuple


def item_key(item: Any) -> Tuple[Any, ...]:
    """Return a sort key giving a total order over mixed items."""
    if isinstance(item, bool):
        return (0, int(item))
    if isinstance(item, Real):
        return (0, item)
    if isinstance(item, str):
        return (1, item)
    sort_key = getattr(item, "sort_key", None)
    if callable(sort_key):
        return (2, sort_key())
    if isinstance(item, (frozenset, set)):
        members = sorted((item_key(x) for x in item))
        return (3, len(members), tuple(members))
    if isinstance(item, tuple):
        return (4, tuple(item_key(x) for x in item))
    return (5, repr(item))


def sorted_items(items: Iterable[Any]) -> List[Any]:
    """Sort any iterable of items with :func:`item_key`."""
    return sorted(items, key=item_key)
