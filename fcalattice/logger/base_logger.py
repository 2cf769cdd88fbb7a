"""Base logging functionality for tracing lattice algorithms."""

import logging
from typing import Any, Callable, List, TypeVar, cast
from functools import wraps

F = TypeVar("F", bound=Callable[..., Any])


class AlgorithmLogger:
    """Base logger class for algorithm tracing and debugging."""

    def __init__(self, name: str):
        self.name = name
        self.disabled = False
        self._records: List[str] = []
        self._section_open = False

        self.logger = logging.getLogger(name)

        # Only add a default StreamHandler if no handlers exist, so that two
        # AlgorithmLogger instances sharing a name do not duplicate output.
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter("%(message)s")
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)
            self.logger.propagate = False
        else:
            if self.logger.level == logging.NOTSET:
                self.logger.setLevel(logging.INFO)
            self.logger.propagate = False

    def section(self, title: str):
        """Open a new section in the log."""
        if self.disabled:
            return
        self._section_open = True
        self.logger.info(f"\n{'=' * 20} {title} {'=' * 20}\n")
        self._records.append(f"[section] {title}")

    def subsection(self, title: str):
        """Open a new subsection in the log."""
        if self.disabled:
            return
        self.logger.info(f"\n{'-' * 15} {title} {'-' * 15}\n")
        self._records.append(f"[subsection] {title}")

    def info(self, message: str):
        """Log info message."""
        if self.disabled:
            return
        self.logger.info(message)
        self._records.append(message)

    def warning(self, message: str):
        """Log warning message."""
        if self.disabled:
            return
        self.logger.warning(message)
        self._records.append(f"[warning] {message}")

    def error(self, message: str):
        """Log an error message."""
        if self.disabled:
            return
        self.logger.error(message)
        self._records.append(f"[error] {message}")

    def debug(self, message: str):
        """Log debug message."""
        if self.disabled:
            return
        self.logger.debug(message)
        self._records.append(f"[debug] {message}")

    def result(self, label: str, value: Any):
        """Log a result with a label."""
        if self.disabled:
            return
        self.logger.info(f"{label}: {value}")
        self._records.append(f"{label}: {value}")

    def end_section(self):
        """End the current section."""
        if self.disabled:
            return
        self._section_open = False

    def clear(self):
        """Clear all accumulated records."""
        self._records = []
        self._section_open = False

    def get_transcript(self) -> str:
        """Return everything logged since the last clear, one record per line."""
        return "\n".join(self._records)

    def log_execution(self, func: F) -> F:
        """Decorator for logging function execution."""

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            self.section(f"Executing {func.__name__}")
            try:
                result = func(*args, **kwargs)
                self.info(f"{func.__name__} completed successfully")
                return result
            except Exception as e:
                self.info(f"Error in {func.__name__}: {str(e)}")
                raise
            finally:
                self.end_section()

        return cast(F, wrapper)
