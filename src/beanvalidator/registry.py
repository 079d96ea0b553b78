"""Rule registry for bean-validator.

Maps rule names used in field annotations to their RuleDefinition.
A registry is immutable once built; deriving a registry with extra rules
returns a new instance, so tests and applications can carry their own
registries without touching the shared default.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from beanvalidator.types import RuleCategory, RuleDefinition


class RuleRegistry:
    """Read-only registry of validation rules.

    Example:
        registry = RuleRegistry([RuleDefinition(name="slug", ...)])

        rule = registry.get("slug")
        message = rule("Handle", "Not A Slug")  # Returns error message or None
    """

    def __init__(self, definitions: Iterable[RuleDefinition] = ()):
        rules: dict[str, RuleDefinition] = {}
        for rule_def in definitions:
            if rule_def.name in rules:
                raise ValueError(f"Rule '{rule_def.name}' is registered more than once")
            rules[rule_def.name] = rule_def
        self._rules: Mapping[str, RuleDefinition] = MappingProxyType(rules)

    @property
    def rules(self) -> Mapping[str, RuleDefinition]:
        """Read-only view of the name -> definition mapping."""
        return self._rules

    def get(self, name: str) -> RuleDefinition | None:
        """Look up a rule by exact name.

        Args:
            name: Rule name as written in the annotation

        Returns:
            The rule definition, or None if no rule has that name
        """
        return self._rules.get(name)

    def is_registered(self, name: str) -> bool:
        """Check if a rule is registered."""
        return name in self._rules

    def list_registered(self) -> list[str]:
        """List all registered rule names."""
        return sorted(self._rules)

    def list_by_category(self, category: RuleCategory) -> list[RuleDefinition]:
        """List rules in a specific category."""
        return [r for r in self._rules.values() if r.category == category]

    def extend(self, *definitions: RuleDefinition) -> "RuleRegistry":
        """Return a new registry holding these rules plus the given ones.

        Raises:
            ValueError: If a definition reuses an existing rule name
        """
        return RuleRegistry([*self._rules.values(), *definitions])

    def export_documentation(self) -> dict[str, Any]:
        """Export the full registry for documentation output.

        Returns:
            Dict with all rule definitions, also grouped by category
        """
        by_category: dict[str, list[dict[str, Any]]] = {}
        for rule_def in self._rules.values():
            by_category.setdefault(rule_def.category.value, []).append(rule_def.to_dict())

        return {
            "rules": {name: r.to_dict() for name, r in sorted(self._rules.items())},
            "byCategory": by_category,
        }

    def __contains__(self, name: object) -> bool:
        return name in self._rules

    def __len__(self) -> int:
        return len(self._rules)
