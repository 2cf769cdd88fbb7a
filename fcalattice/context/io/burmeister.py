"""
Burmeister ``.cxt`` format.

    B
    <name line, ignored>
    <number of objects>
    <number of attributes>
    <object names, one per line>
    <attribute names, one per line>
    <one row per object: X for incidence, any other character for none>

Blank lines between entries are skipped.
"""

from __future__ import annotations

import logging
from typing import List, TextIO

from fcalattice.context.formal_context import FormalContext
from fcalattice.exceptions import ContextFormatError

logger = logging.getLogger(__name__)

HEADER = "B"
EXTENSION = "cxt"


class BurmeisterSerializer:
    def read(self, context: FormalContext, stream: TextIO) -> None:
        """
        Fill ``context`` from a Burmeister stream.

        Raises:
            ContextFormatError: On a missing header, a non-integer count,
                a premature end of input or a row shorter than the
                attribute count.
        """
        header = self._read_line(stream)
        if header != HEADER:
            raise ContextFormatError("Burmeister magic header not found")
        self._read_line(stream)

        try:
            number_of_objects = int(self._next_entry(stream))
            number_of_attributes = int(self._next_entry(stream))
        except ValueError as e:
            raise ContextFormatError(f"Invalid Burmeister count: {e}") from e

        objects: List[str] = [self._next_entry(stream) for _ in range(number_of_objects)]
        attributes: List[str] = [
            self._next_entry(stream) for _ in range(number_of_attributes)
        ]
        context.add_objects(objects)
        context.add_attributes(attributes)

        for obj in objects:
            row = self._next_entry(stream)
            if len(row) < number_of_attributes:
                raise ContextFormatError(
                    f"Row for {obj!r} has {len(row)} cells, expected {number_of_attributes}"
                )
            for attribute, cell in zip(attributes, row):
                if cell == "X":
                    context.add_incidence(obj, attribute)
        context.finalize()
        logger.debug(
            "Read Burmeister context with %d objects and %d attributes",
            number_of_objects,
            number_of_attributes,
        )

    @staticmethod
    def _read_line(stream: TextIO) -> str:
        line = stream.readline()
        if line == "":
            raise ContextFormatError("Unexpected end of Burmeister input")
        return line.rstrip("\r\n")

    def _next_entry(self, stream: TextIO) -> str:
        line = self._read_line(stream)
        while line == "":
            line = self._read_line(stream)
        return line

    def write(self, context: FormalContext, stream: TextIO) -> None:
        objects = context.objects
        attributes = context.attributes
        lines = [HEADER, "", str(len(objects)), str(len(attributes))]
        lines.extend(str(obj) for obj in objects)
        lines.extend(str(attribute) for attribute in attributes)
        for obj in objects:
            lines.append(
                "".join(
                    "X" if context.has_incidence(obj, attribute) else "."
                    for attribute in attributes
                )
            )
        stream.write("\n".join(lines) + "\n")
