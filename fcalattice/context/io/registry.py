"""
Reader and writer lookup by file extension.

A registry is a plain value: build one with :func:`default_registry` (or
empty) and pass it to whoever reads or writes contexts.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from fcalattice.context.formal_context import FormalContext
from fcalattice.context.io import burmeister, fimi
from fcalattice.exceptions import UnsupportedFormatError

logger = logging.getLogger(__name__)

# any object with read(context, stream) or write(context, stream)
ContextReader = Any
ContextWriter = Any


def _extension(path: str) -> str:
    return os.path.splitext(path)[1].lstrip(".").lower()


class ContextIORegistry:
    def __init__(self) -> None:
        self._readers: Dict[str, ContextReader] = {}
        self._writers: Dict[str, ContextWriter] = {}

    def register_reader(self, reader: ContextReader, extension: str) -> None:
        self._readers[extension.lower()] = reader

    def register_writer(self, writer: ContextWriter, extension: str) -> None:
        self._writers[extension.lower()] = writer

    def unregister_reader(self, extension: str) -> Optional[ContextReader]:
        return self._readers.pop(extension.lower(), None)

    def unregister_writer(self, extension: str) -> Optional[ContextWriter]:
        return self._writers.pop(extension.lower(), None)

    def get_reader(self, extension: str) -> Optional[ContextReader]:
        return self._readers.get(extension.lower())

    def get_writer(self, extension: str) -> Optional[ContextWriter]:
        return self._writers.get(extension.lower())

    def read_context(self, path: str, context: Optional[FormalContext] = None) -> FormalContext:
        """
        Read ``path`` with the reader registered for its extension.

        Raises:
            UnsupportedFormatError: If no reader handles the extension.
            ContextFormatError: If the file is malformed.
        """
        extension = _extension(path)
        reader = self.get_reader(extension)
        if reader is None:
            raise UnsupportedFormatError(f"No context reader for extension {extension!r}")
        context = context if context is not None else FormalContext()
        with open(path, "r", encoding="utf-8") as stream:
            reader.read(context, stream)
        logger.debug("Read context from %s", path)
        return context

    def write_context(self, context: FormalContext, path: str) -> None:
        """
        Write ``context`` to ``path`` with the writer registered for its extension.

        Raises:
            UnsupportedFormatError: If no writer handles the extension.
        """
        extension = _extension(path)
        writer = self.get_writer(extension)
        if writer is None:
            raise UnsupportedFormatError(f"No context writer for extension {extension!r}")
        with open(path, "w", encoding="utf-8") as stream:
            writer.write(context, stream)
        logger.debug("Wrote context to %s", path)


def default_registry() -> ContextIORegistry:
    """A registry with the Burmeister (``cxt``) and FIMI (``dat``) formats."""
    registry = ContextIORegistry()
    burmeister_serializer = burmeister.BurmeisterSerializer()
    fimi_serializer = fimi.FIMISerializer()
    registry.register_reader(burmeister_serializer, burmeister.EXTENSION)
    registry.register_writer(burmeister_serializer, burmeister.EXTENSION)
    registry.register_reader(fimi_serializer, fimi.EXTENSION)
    registry.register_writer(fimi_serializer, fimi.EXTENSION)
    return registry
