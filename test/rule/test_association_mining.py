"""
Association basis of a context whose closed set lattice is the pentagon N5:
closed sets {}, {x}, {y}, {x, z} and {x, y, z}.
"""

import logging

import pytest

from fcalattice.config import RuleMiningConfig
from fcalattice.context import FormalContext
from fcalattice.rule import AssociationRule, Rule
from fcalattice.rule.mining import AssociationRuleMiner, mine_association_rules

APPROXIMATE = AssociationRule({"x", "z"}, {"y"}, 0.25, 0.5)
EXACT = AssociationRule({"x", "y"}, {"z"}, 0.25, 1.0)


@pytest.fixture
def pentagon_context():
    context = FormalContext(["o1", "o2", "o3", "o4"], ["x", "y", "z"])
    context.add_incidences("o1", ["x"])
    context.add_incidences("o2", ["y"])
    context.add_incidences("o3", ["x", "z"])
    context.add_incidences("o4", ["x", "y", "z"])
    return context


def test_closed_set_lattice_is_pentagon(pentagon_context):
    lattice = pentagon_context.closed_set_lattice()
    assert lattice.number_of_nodes() == 5
    assert len(lattice.join_irreducibles()) == 3
    assert not lattice.is_atomistic()
    assert len(lattice.get_canonical_direct_basis()) == 2


def test_association_basis_without_thresholds(pentagon_context):
    lattice = pentagon_context.closed_set_lattice()
    basis = lattice.get_association_basis(pentagon_context)
    assert set(basis.rules) == {APPROXIMATE, EXACT}
    assert basis.elements == ["x", "y", "z"]


def test_confidence_threshold_is_strict(pentagon_context):
    lattice = pentagon_context.closed_set_lattice()
    basis = lattice.get_association_basis(pentagon_context, confidence=0.5)
    assert basis.rules == [EXACT]


def test_support_threshold_filters_premises(pentagon_context):
    lattice = pentagon_context.closed_set_lattice()
    basis = lattice.get_association_basis(pentagon_context, support=0.3)
    assert basis.rules == [APPROXIMATE]


def test_rules_hold_in_context(pentagon_context):
    basis = mine_association_rules(pentagon_context)
    for rule in basis:
        premise_size = pentagon_context.extent_size(rule.premise)
        rule_size = pentagon_context.extent_size(rule.items)
        assert rule.confidence == pytest.approx(rule_size / premise_size)
        assert rule.support == pytest.approx(rule_size / 4)


def test_exact_rules_are_implications(pentagon_context):
    basis = mine_association_rules(pentagon_context)
    for rule in basis:
        if rule.is_exact():
            assert rule.conclusion <= pentagon_context.closure(rule.premise)


def test_association_basis_over_own_table(pentagon):
    # the table's attributes are the join-irreducible nodes themselves
    lattice, n = pentagon
    table = lattice.get_table()
    basis = lattice.get_association_basis(table)
    assert len(basis) == 1
    rule = basis.rules[0]
    assert rule.premise == {n["c"]}
    assert rule.conclusion == {n["a"]}
    assert rule.support == pytest.approx(1 / 3)
    assert rule.confidence == 1.0
    assert rule.conclusion <= table.closure(rule.premise)


def test_boolean_context_has_no_rules(animals):
    assert len(mine_association_rules(animals)) == 0


def test_empty_context():
    assert len(mine_association_rules(FormalContext())) == 0


class TestMiner:
    def test_matches_lattice_basis(self, pentagon_context):
        config = RuleMiningConfig(support=0.0, confidence=0.5)
        rules = AssociationRuleMiner(config).mine(pentagon_context)
        assert rules.rules == [EXACT]

    def test_logs_progress(self, pentagon_context, caplog):
        with caplog.at_level(logging.INFO, logger="fcalattice.rule.mining"):
            mine_association_rules(pentagon_context, RuleMiningConfig(log_context=True))
        messages = [record.getMessage() for record in caplog.records]
        assert any("Closed set lattice with 5 concepts" in m for m in messages)
        assert any("Mined 2 association rules" in m for m in messages)

    def test_custom_logger(self, pentagon_context):
        logger = logging.getLogger("test.mining")
        miner = AssociationRuleMiner(logger=logger)
        assert miner.logger is logger
        assert isinstance(miner.config, RuleMiningConfig)

    @pytest.mark.parametrize("support, confidence", [(-0.1, 0.0), (0.0, 1.1)])
    def test_config_validation(self, support, confidence):
        with pytest.raises(ValueError):
            RuleMiningConfig(support=support, confidence=confidence)


def test_rules_are_plain_values():
    assert EXACT.with_conclusion({"z"}) == EXACT
    assert Rule({"x", "y"}, {"z"}) != EXACT
