"""Core types for the bean-validator rule engine.

This module defines the types shared by the registry, the rule functions and
the struct walker:
- Rule: a pure callable (field name, value, *params) -> message or None
- RuleDefinition: a rule plus the metadata used for documentation
- RuleInvocation: one parsed "name=param1,param2" token
- ValidationError / ValidationErrors: the result of a validation pass
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

# Rule function signature: (field_name, value, *params) -> error message or None
RuleFn = Callable[..., "str | None"]


class RuleCategory(Enum):
    """Categories for organizing rules in documentation."""

    PRESENCE = "presence"
    NUMBER = "number"
    STRING = "string"
    COLLECTION = "collection"
    DATE = "date"


@dataclass(frozen=True)
class RuleParameter:
    """Definition of a positional rule parameter.

    Attributes:
        name: Parameter name
        type: Expected type ("integer", "format", "date")
        description: Human-readable description
    """

    name: str
    type: str
    description: str


@dataclass(frozen=True)
class RuleDefinition:
    """Complete definition of a validation rule.

    Attributes:
        name: Rule name as used in field annotations
        description: Human-readable description
        category: Category for documentation organization
        implementation: The rule callable
        parameters: Positional parameter definitions
        examples: Example annotations using this rule
    """

    name: str
    description: str
    category: RuleCategory
    implementation: RuleFn
    parameters: tuple[RuleParameter, ...] = ()
    examples: tuple[str, ...] = ()

    def __call__(self, field_name: str, value: Any, *params: str) -> str | None:
        return self.implementation(field_name, value, *params)

    def to_dict(self) -> dict[str, Any]:
        """Export for the documentation listing."""
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "parameters": [
                {"name": p.name, "type": p.type, "description": p.description}
                for p in self.parameters
            ],
            "examples": list(self.examples),
        }


@dataclass(frozen=True)
class RuleInvocation:
    """A rule name and the raw string parameters it is called with."""

    name: str
    params: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidationError:
    """A single failed rule application.

    Attributes:
        field: Name of the field the rule was applied to
        message: Human-readable message produced by the rule
    """

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message}


class ValidationErrors(list[ValidationError]):
    """Ordered collection of validation errors.

    Entries appear in field declaration order, then in the order the rules
    are listed for each field. An empty collection means the record is valid.
    """

    @property
    def has_errors(self) -> bool:
        return len(self) > 0

    @property
    def message(self) -> str:
        """All errors joined into a single human-readable string."""
        return "; ".join(str(e) for e in self)

    def __str__(self) -> str:
        return self.message

    def for_field(self, name: str) -> "ValidationErrors":
        """Errors reported for a single field, in rule order."""
        return ValidationErrors(e for e in self if e.field == name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": not self.has_errors,
            "errors": [e.to_dict() for e in self],
        }

    def raise_for_errors(self) -> None:
        """Raise RecordValidationError if any rule failed."""
        if self.has_errors:
            raise RecordValidationError(self)


# =============================================================================
# Exceptions
# =============================================================================


class RecordShapeError(TypeError):
    """Raised when validation is invoked on something that is not a record.

    This is a programmer error, not a validation result.
    """


class SchemaError(ValueError):
    """Raised when an explicit rule schema document is malformed."""


class RecordValidationError(ValueError):
    """Raised by ValidationErrors.raise_for_errors().

    Attributes:
        errors: The collection that triggered the exception
    """

    def __init__(self, errors: ValidationErrors):
        super().__init__(errors.message)
        self.errors = errors
