"""Association rule mining on a formal context."""

from typing import Optional
import logging
import time

from fcalattice.config import RuleMiningConfig
from fcalattice.context.formal_context import FormalContext
from fcalattice.rule.implicational_system import ImplicationalSystem


class AssociationRuleMiner:
    """
    Builds the closed set lattice of a context and reads its association basis.
    """

    def __init__(
        self,
        config: Optional[RuleMiningConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            config: Mining thresholds.
            logger: Logger instance for mining events.
        """
        self.config: RuleMiningConfig = config or RuleMiningConfig()
        self.logger = logger or logging.getLogger(self.config.logger_name)

    def mine(self, context: FormalContext) -> ImplicationalSystem:
        start_time = time.perf_counter()
        if self.config.log_context:
            context.log_table("Mined context")

        lattice = context.closed_set_lattice()
        self.logger.info(
            f"Closed set lattice with {lattice.number_of_nodes()} concepts "
            f"built in {time.perf_counter() - start_time:.3f}s"
        )

        rules = lattice.get_association_basis(
            context, self.config.support, self.config.confidence
        )
        self.logger.info(
            f"Mined {len(rules)} association rules in "
            f"{time.perf_counter() - start_time:.3f}s"
        )
        return rules


def mine_association_rules(
    context: FormalContext, config: Optional[RuleMiningConfig] = None
) -> ImplicationalSystem:
    return AssociationRuleMiner(config).mine(context)
