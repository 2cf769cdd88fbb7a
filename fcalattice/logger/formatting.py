"""Text formatting utilities for logging."""

from typing import Any, Iterable

from fcalattice.elements.ordering import item_key


def format_set(s: Iterable[Any]) -> str:
    """Format set for consistent display."""
    items = sorted(s, key=item_key)
    if not items:
        return "∅"
    return "{" + ", ".join(str(x) for x in items) + "}"


def format_items(s: Iterable[Any]) -> str:
    """Format a premise or conclusion as space separated items."""
    return " ".join(str(x) for x in sorted(s, key=item_key))


def format_family(family: Iterable[Iterable[Any]]) -> str:
    """Format a family of sets, e.g. the witnesses valuing a dependency edge."""
    members = sorted(
        (sorted(member, key=item_key) for member in family),
        key=lambda m: (len(m), [item_key(x) for x in m]),
    )
    return "{" + ", ".join(format_set(m) for m in members) + "}"
