"""bean-validator: declarative field validation.

Fields carry a rule annotation such as ``"required,min=18,max=100"``;
validation runs every rule of every field and returns all failures.

Usage:
    from dataclasses import dataclass
    from beanvalidator import validate, validated_field

    @dataclass
    class User:
        name: str = validated_field("required,non-blank")
        email: str = validated_field("email")

    errors = validate(User(name="", email="nope"))
    errors.has_errors  # True
    errors.message     # "name: name is required; name: name must not be blank; ..."
"""

from beanvalidator.config import ValidatorConfig
from beanvalidator.parsing import parse_annotation, parse_rule
from beanvalidator.registry import RuleRegistry
from beanvalidator.rules import DEFAULT_REGISTRY, builtin_rules
from beanvalidator.schema import FieldRules, RecordSchema, load_schema, schema_from_dict
from beanvalidator.types import (
    RecordShapeError,
    RecordValidationError,
    RuleCategory,
    RuleDefinition,
    RuleFn,
    RuleInvocation,
    RuleParameter,
    SchemaError,
    ValidationError,
    ValidationErrors,
)
from beanvalidator.walker import Validator, validate, validated_field

__all__ = [
    # Types
    "RuleCategory",
    "RuleDefinition",
    "RuleFn",
    "RuleInvocation",
    "RuleParameter",
    "ValidationError",
    "ValidationErrors",
    # Errors
    "RecordShapeError",
    "RecordValidationError",
    "SchemaError",
    # Registry
    "DEFAULT_REGISTRY",
    "RuleRegistry",
    "builtin_rules",
    # Walker
    "Validator",
    "parse_annotation",
    "parse_rule",
    "validate",
    "validated_field",
    # Schemas
    "FieldRules",
    "RecordSchema",
    "load_schema",
    "schema_from_dict",
    # Config
    "ValidatorConfig",
]
