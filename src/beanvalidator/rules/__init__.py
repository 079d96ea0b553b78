"""Built-in validation rules.

DEFAULT_REGISTRY holds every built-in rule and is what the walker uses
unless it is given a registry of its own.
"""

from beanvalidator.registry import RuleRegistry
from beanvalidator.rules.core import CORE_RULES, EMAIL_PATTERN, is_empty
from beanvalidator.rules.dates import DATE_RULES, parse_date, translate_layout
from beanvalidator.types import RuleDefinition


def builtin_rules() -> list[RuleDefinition]:
    """All built-in rule definitions, presence rules first and date rules last."""
    return [*CORE_RULES, *DATE_RULES]


DEFAULT_REGISTRY = RuleRegistry(builtin_rules())

__all__ = [
    "CORE_RULES",
    "DATE_RULES",
    "DEFAULT_REGISTRY",
    "EMAIL_PATTERN",
    "builtin_rules",
    "is_empty",
    "parse_date",
    "translate_layout",
]
