"""Table display functionality for logs.

Renders small incidence tables and rule listings for terminal logs.
"""

from typing import Any, List, Optional, Sequence
from tabulate import tabulate
from fcalattice.logger.base_logger import AlgorithmLogger


class TableLogger(AlgorithmLogger):
    """Extension of AlgorithmLogger with table support."""

    def table(
        self,
        data: List[List[Any]],
        headers: Optional[List[str]] = None,
        title: Optional[str] = None,
        tablefmt: str = "grid",
        colalign: Optional[Sequence[Optional[str]]] = None,
    ) -> None:
        """Display data as a formatted table."""
        if self.disabled:
            return

        if headers is None:
            headers = []

        if title:
            self.logger.info(f"\n{title}:")
            self._records.append(f"[table] {title}")

        ascii_table = tabulate(
            data,
            headers=headers,
            tablefmt=tablefmt,
            colalign=colalign,
            showindex=False,
        )
        self.info(ascii_table)

    def incidence(
        self,
        rows: Sequence[Any],
        columns: Sequence[Any],
        holds: Any,
        title: Optional[str] = None,
    ) -> None:
        """Display a cross table where ``holds(row, column)`` marks a cell with X."""
        if self.disabled:
            return
        data = [
            [str(row)] + ["X" if holds(row, column) else "." for column in columns]
            for row in rows
        ]
        self.table(
            data,
            headers=[""] + [str(column) for column in columns],
            title=title,
            tablefmt="simple",
        )
