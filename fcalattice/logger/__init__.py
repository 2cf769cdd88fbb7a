"""Logging package for fcalattice."""

from fcalattice.logger.base_logger import AlgorithmLogger
from fcalattice.logger.table_logger import TableLogger
from fcalattice.logger.combined_logger import Logger
from fcalattice.logger.formatting import (
    format_set,
    format_items,
    format_family,
)

# Unified singleton for algorithm tracing
lattice_logger = Logger("FCALattice")
lattice_logger.disabled = True

__all__ = [
    "AlgorithmLogger",
    "TableLogger",
    "Logger",
    "lattice_logger",
    "format_set",
    "format_items",
    "format_family",
]
