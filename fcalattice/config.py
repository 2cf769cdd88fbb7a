"""Configuration objects."""

from dataclasses import dataclass


@dataclass
class RuleMiningConfig:
    """Thresholds for association rule mining.

    A rule is kept when its support is strictly above ``support`` and, for
    approximate rules, its confidence strictly above ``confidence``.
    """

    support: float = 0.0
    confidence: float = 0.0
    log_context: bool = False
    logger_name: str = "fcalattice.rule.mining"

    def __post_init__(self) -> None:
        """Validate thresholds."""
        if not 0.0 <= self.support <= 1.0:
            raise ValueError(f"support must lie in [0, 1], got {self.support}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must lie in [0, 1], got {self.confidence}")
