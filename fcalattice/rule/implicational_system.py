"""
Implicational systems: a ground set of items plus a set of rules over it.

Rules are immutable values, so every normalisation (compaction, right
maximality, properness) replaces rules rather than editing them in place.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from fcalattice.elements.ordering import sorted_items
from fcalattice.rule.rule import AssociationRule, Rule


class ImplicationalSystem:
    def __init__(
        self,
        elements: Optional[Iterable[Any]] = None,
        rules: Optional[Iterable[Rule]] = None,
    ) -> None:
        self._elements: Set[Any] = set(elements) if elements is not None else set()
        self._rules: Set[Rule] = set()
        for rule in rules or ():
            self.add_rule(rule)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def elements(self) -> List[Any]:
        return sorted_items(self._elements)

    @property
    def rules(self) -> List[Rule]:
        return sorted(self._rules, key=lambda rule: rule.sort_key())

    def number_of_elements(self) -> int:
        return len(self._elements)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __contains__(self, rule: object) -> bool:
        return rule in self._rules

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_element(self, element: Any) -> bool:
        if element in self._elements:
            return False
        self._elements.add(element)
        return True

    def add_all_elements(self, elements: Iterable[Any]) -> bool:
        added = False
        for element in elements:
            added = self.add_element(element) or added
        return added

    def add_rule(self, rule: Rule) -> bool:
        """Add ``rule`` if all its items belong to the ground set and it is new."""
        if not rule.items <= self._elements or rule in self._rules:
            return False
        self._rules.add(rule)
        return True

    def remove_rule(self, rule: Rule) -> bool:
        if rule not in self._rules:
            return False
        self._rules.remove(rule)
        return True

    def replace_rule(self, old: Rule, new: Rule) -> bool:
        if not self.remove_rule(old):
            return False
        self.add_rule(new)
        return True

    # ------------------------------------------------------------------
    # Closure
    # ------------------------------------------------------------------

    def closure(self, items: Iterable[Any]) -> FrozenSet[Any]:
        """Forward chaining: apply rules whose premise holds until nothing changes."""
        result = set(items)
        changed = True
        while changed:
            changed = False
            for rule in self._rules:
                if rule.premise <= result and not rule.conclusion <= result:
                    result |= rule.conclusion
                    changed = True
        return frozenset(result)

    # ------------------------------------------------------------------
    # Normal forms
    # ------------------------------------------------------------------

    def make_proper(self) -> int:
        """
        Remove premise items from every conclusion; drop rules left empty.

        Returns the number of rules removed.
        """
        before = len(self._rules)
        proper: Set[Rule] = set()
        for rule in self._rules:
            conclusion = rule.conclusion - rule.premise
            if conclusion:
                proper.add(rule.with_conclusion(conclusion))
        self._rules = proper
        return before - len(self._rules)

    def make_compact(self) -> int:
        """
        Merge rules sharing a premise into one rule with the union of conclusions.

        Returns the number of rules removed.
        """
        return self._merge(lambda rule: (rule.premise,))

    def make_compact_association(self) -> int:
        """Like :meth:`make_compact`, merging only rules with equal support and confidence."""

        def key(rule: Rule) -> Tuple[Any, ...]:
            if isinstance(rule, AssociationRule):
                return (rule.premise, rule.support, rule.confidence)
            return (rule.premise, None, None)

        return self._merge(key)

    def _merge(self, key) -> int:
        before = len(self._rules)
        groups: Dict[Tuple[Any, ...], List[Rule]] = defaultdict(list)
        for rule in self._rules:
            groups[key(rule)].append(rule)
        merged: Set[Rule] = set()
        for rules in groups.values():
            conclusion: FrozenSet[Any] = frozenset().union(
                *(rule.conclusion for rule in rules)
            )
            merged.add(rules[0].with_conclusion(conclusion))
        self._rules = merged
        return before - len(self._rules)

    def make_right_maximal(self) -> int:
        """
        Compact the system, then extend each conclusion to the closure of its
        premise (premise items excluded).

        Returns the number of rules removed by compaction.
        """
        removed = self.make_compact()
        snapshot = list(self._rules)
        maximal: Set[Rule] = set()
        for rule in snapshot:
            maximal.add(rule.with_conclusion(self.closure(rule.premise) - rule.premise))
        self._rules = {rule for rule in maximal if rule.conclusion}
        return removed + len(snapshot) - len(self._rules)

    def is_proper(self) -> bool:
        return all(
            rule.conclusion and not rule.premise & rule.conclusion for rule in self._rules
        )

    def is_compact(self) -> bool:
        premises = [rule.premise for rule in self._rules]
        return len(premises) == len(set(premises))

    def is_right_maximal(self) -> bool:
        return self.is_compact() and all(
            rule.conclusion >= self.closure(rule.premise) - rule.premise
            for rule in self._rules
        )

    def __str__(self) -> str:
        lines = [" ".join(str(element) for element in self.elements)]
        lines.extend(str(rule) for rule in self.rules)
        return "\n".join(lines) + "\n"
