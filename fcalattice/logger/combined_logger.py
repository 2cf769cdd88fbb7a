"""Combined logger with all functionality."""

from fcalattice.logger.base_logger import AlgorithmLogger
from fcalattice.logger.table_logger import TableLogger
import logging


class Logger(TableLogger):
    """
    Combined logger used by the lattice and context layers.

    Usage:
        logger = Logger("my_algorithm")
        logger.section("Dependency graph")
        logger.info("Computing witnesses...")
        logger.table(data, headers=["premise", "conclusion"])
    """

    def __init__(self, name: str):
        """Initialize the combined logger."""
        AlgorithmLogger.__init__(self, name)

    def setup_console_logging(self, level: int = logging.INFO):
        """Enable logging to the console."""
        self.disabled = False
        if not any(isinstance(h, logging.StreamHandler) for h in self.logger.handlers):
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        self.logger.setLevel(level)
