"""
FIMI ``.dat`` format: one transaction per line, items as integers.

Objects are named ``O1``, ``O2``, ... after their line number. When writing,
attributes are numbered from 1 in their sorted order.
"""

from __future__ import annotations

import logging
from typing import TextIO

from fcalattice.context.formal_context import FormalContext
from fcalattice.exceptions import ContextFormatError

logger = logging.getLogger(__name__)

EXTENSION = "dat"


class FIMISerializer:
    def read(self, context: FormalContext, stream: TextIO) -> None:
        """
        Fill ``context`` from a FIMI stream.

        Raises:
            ContextFormatError: If an item is not an integer.
        """
        line_number = 0
        for line in stream:
            line_number += 1
            identifier = f"O{line_number}"
            context.add_object(identifier)
            for token in line.split():
                try:
                    attribute = int(token)
                except ValueError as e:
                    raise ContextFormatError(
                        f"Invalid FIMI item {token!r} on line {line_number}"
                    ) from e
                context.add_attribute(attribute)
                context.add_incidence(identifier, attribute)
        context.finalize()
        logger.debug("Read FIMI context with %d transactions", line_number)

    def write(self, context: FormalContext, stream: TextIO) -> None:
        numbering = {attribute: i for i, attribute in enumerate(context.attributes, 1)}
        for obj in context.objects:
            items = sorted(numbering[attribute] for attribute in context.intent(obj))
            stream.write(" ".join(str(item) for item in items) + "\n")
