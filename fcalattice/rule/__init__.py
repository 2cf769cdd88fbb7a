from fcalattice.rule.rule import AssociationRule, Rule
from fcalattice.rule.implicational_system import ImplicationalSystem

__all__ = ["Rule", "AssociationRule", "ImplicationalSystem"]
