"""
Custom exceptions for fcalattice.

Only hard precondition violations raise. Legitimate algebraic non-existence
(no meet, no unique top, node not found) is reported as ``None``.
"""

from __future__ import annotations
from typing import Any, Iterable, NoReturn


class FCALatticeError(Exception):
    """Base exception for lattice and context errors."""

    pass


class CyclicGraphError(FCALatticeError):
    """Raised when an acyclic structure is built from a graph containing a cycle."""

    pass


class UnknownElementError(FCALatticeError):
    """Raised when an unregistered object, attribute or item is used."""

    @staticmethod
    def raise_unknown(kind: str, elements: Iterable[Any], owner: str) -> NoReturn:
        """
        Raises an UnknownElementError listing the offending elements.

        Args:
            kind: What was looked up ("object", "attribute", "item")
            elements: The elements that are not registered
            owner: Name of the structure that was queried

        Raises:
            UnknownElementError: Always raised with detailed error information
        """
        names = ", ".join(sorted(repr(e) for e in elements))
        raise UnknownElementError(f"Unknown {kind}(s) {names} for {owner}")


class ContextFormatError(FCALatticeError):
    """Raised when a serialized context cannot be read."""

    pass


class UnsupportedFormatError(FCALatticeError):
    """Raised when no reader or writer is registered for a file extension."""

    pass


class ModelMismatchError(FCALatticeError):
    """Raised when categorical structures built on different models are combined."""

    pass


class ModelLockedError(FCALatticeError):
    """Raised when a categorical model is extended after being instantiated."""

    pass
