"""Presence, numeric, string and size rules.

Rules:
- Presence: required, non-null, non-blank, non-empty, isTrue
- Number: min, max, positive, negative, positiveOrZero, negativeOrZero
- String: email
- Collection: size, minSize, maxSize

Every rule has the signature (field_name, value, *params) and returns an
error message, or None when the value passes.
"""

import re
from collections.abc import Mapping, Sequence, Set
from dataclasses import fields, is_dataclass
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from beanvalidator.types import RuleCategory, RuleDefinition, RuleParameter

# Email: same shape as the field-constraint email check
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def is_empty(value: Any) -> bool:
    """Return True for None, blank strings, empty collections and zero values."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (Sequence, Mapping, Set)):
        return len(value) == 0
    return _is_zero(value)


def _is_zero(value: Any) -> bool:
    """Return True if value is the zero value of its kind.

    Numbers and booleans compare with 0, strings and collections must be
    empty, and dataclass or pydantic records are zero when every field is.
    Any other object is never zero; its constructor is not called.
    """
    if value is None:
        return True
    if isinstance(value, (int, float, complex, Decimal)):
        return value == 0
    if isinstance(value, (str, Sequence, Mapping, Set)):
        return len(value) == 0
    if is_dataclass(value) and not isinstance(value, type):
        return all(_is_zero(getattr(value, f.name)) for f in fields(value))
    if isinstance(value, BaseModel):
        return all(_is_zero(getattr(value, name)) for name in type(value).model_fields)
    return False


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_number(value: Any) -> int | float | Decimal | None:
    """Return int, float and Decimal values unchanged; None for anything else.

    Values are compared with zero as they are, so integers too large for a
    float keep their sign. A Decimal NaN cannot be ordered and counts as
    non-numeric.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    if isinstance(value, Decimal) and value.is_nan():
        return None
    return value


def _length(value: Any) -> int | None:
    """Length of a string or collection; None if the value has no length.

    Strings are measured in UTF-8 bytes.
    """
    if isinstance(value, str):
        return len(value.encode("utf-8"))
    if isinstance(value, (Sequence, Mapping, Set)):
        return len(value)
    return None


def _parse_int(param: str) -> int | None:
    if not _INTEGER_PATTERN.fullmatch(param):
        return None
    return int(param)


# -----------------------------------------------------------------------------
# Presence Rules
# -----------------------------------------------------------------------------


def required(field_name: str, value: Any, *params: str) -> str | None:
    if is_empty(value):
        return f"{field_name} is required"
    return None


def non_null(field_name: str, value: Any, *params: str) -> str | None:
    if value is None:
        return f"{field_name} must not be null"
    return None


def non_blank(field_name: str, value: Any, *params: str) -> str | None:
    if isinstance(value, str) and value.strip() == "":
        return f"{field_name} must not be blank"
    return None


def non_empty(field_name: str, value: Any, *params: str) -> str | None:
    if is_empty(value):
        return f"{field_name} must not be empty"
    return None


def is_true(field_name: str, value: Any, *params: str) -> str | None:
    if value is True:
        return None
    return f"{field_name} must be true"


# -----------------------------------------------------------------------------
# Number Rules
# -----------------------------------------------------------------------------


def min_value(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "min rule requires a parameter"
    minimum = _parse_int(params[0])
    if minimum is None:
        return f"invalid min parameter for {field_name}"
    if _is_int(value) and value < minimum:
        return f"{field_name} must be at least {minimum}"
    return None


def max_value(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "max rule requires a parameter"
    maximum = _parse_int(params[0])
    if maximum is None:
        return f"invalid max parameter for {field_name}"
    if _is_int(value) and value > maximum:
        return f"{field_name} must be at most {maximum}"
    return None


def positive(field_name: str, value: Any, *params: str) -> str | None:
    num = _as_number(value)
    if num is not None and num > 0:
        return None
    return f"{field_name} must be positive"


def negative(field_name: str, value: Any, *params: str) -> str | None:
    num = _as_number(value)
    if num is not None and num < 0:
        return None
    return f"{field_name} must be negative"


def positive_or_zero(field_name: str, value: Any, *params: str) -> str | None:
    num = _as_number(value)
    if num is not None and num >= 0:
        return None
    return f"{field_name} must be positive or zero"


def negative_or_zero(field_name: str, value: Any, *params: str) -> str | None:
    num = _as_number(value)
    if num is not None and num <= 0:
        return None
    return f"{field_name} must be negative or zero"


# -----------------------------------------------------------------------------
# String Rules
# -----------------------------------------------------------------------------


def email(field_name: str, value: Any, *params: str) -> str | None:
    if isinstance(value, str) and not EMAIL_PATTERN.fullmatch(value):
        return f"{field_name} is not a valid email"
    return None


# -----------------------------------------------------------------------------
# Collection Rules
# -----------------------------------------------------------------------------


def size(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "size rule requires a size parameter"
    expected = _parse_int(params[0])
    if expected is None:
        return f"invalid size parameter for {field_name}"
    length = _length(value)
    if length is not None and length == expected:
        return None
    return f"{field_name} must have exactly {expected} elements"


def min_size(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "minSize rule requires a size parameter"
    minimum = _parse_int(params[0])
    if minimum is None:
        return f"invalid minSize parameter for {field_name}"
    length = _length(value)
    if length is not None and length >= minimum:
        return None
    return f"{field_name} must have at least {minimum} elements"


def max_size(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "maxSize rule requires a size parameter"
    maximum = _parse_int(params[0])
    if maximum is None:
        return f"invalid maxSize parameter for {field_name}"
    length = _length(value)
    if length is not None and length <= maximum:
        return None
    return f"{field_name} must have at most {maximum} elements"


# -----------------------------------------------------------------------------
# Definitions
# -----------------------------------------------------------------------------

_BOUND = RuleParameter("bound", "integer", "Inclusive integer bound")
_SIZE = RuleParameter("size", "integer", "Number of elements, or UTF-8 bytes for strings")

CORE_RULES: tuple[RuleDefinition, ...] = (
    RuleDefinition(
        name="required",
        description="Value must not be null, blank, empty or the zero value of its type",
        category=RuleCategory.PRESENCE,
        implementation=required,
        examples=("required", "required,non-blank"),
    ),
    RuleDefinition(
        name="non-null",
        description="Value must not be null",
        category=RuleCategory.PRESENCE,
        implementation=non_null,
        examples=("non-null",),
    ),
    RuleDefinition(
        name="non-blank",
        description="String must contain a non-whitespace character; other types pass",
        category=RuleCategory.PRESENCE,
        implementation=non_blank,
        examples=("non-blank",),
    ),
    RuleDefinition(
        name="non-empty",
        description="Value must not be empty",
        category=RuleCategory.PRESENCE,
        implementation=non_empty,
        examples=("non-empty",),
    ),
    RuleDefinition(
        name="isTrue",
        description="Value must be boolean true",
        category=RuleCategory.PRESENCE,
        implementation=is_true,
        examples=("isTrue",),
    ),
    RuleDefinition(
        name="min",
        description="Integer must be at least the bound; other types pass",
        category=RuleCategory.NUMBER,
        implementation=min_value,
        parameters=(_BOUND,),
        examples=("min=18",),
    ),
    RuleDefinition(
        name="max",
        description="Integer must be at most the bound; other types pass",
        category=RuleCategory.NUMBER,
        implementation=max_value,
        parameters=(_BOUND,),
        examples=("max=100", "min=18,max=100"),
    ),
    RuleDefinition(
        name="positive",
        description="Number must be greater than zero",
        category=RuleCategory.NUMBER,
        implementation=positive,
        examples=("positive",),
    ),
    RuleDefinition(
        name="negative",
        description="Number must be less than zero",
        category=RuleCategory.NUMBER,
        implementation=negative,
        examples=("negative",),
    ),
    RuleDefinition(
        name="positiveOrZero",
        description="Number must be zero or greater",
        category=RuleCategory.NUMBER,
        implementation=positive_or_zero,
        examples=("positiveOrZero",),
    ),
    RuleDefinition(
        name="negativeOrZero",
        description="Number must be zero or less",
        category=RuleCategory.NUMBER,
        implementation=negative_or_zero,
        examples=("negativeOrZero",),
    ),
    RuleDefinition(
        name="email",
        description="String must look like an email address; other types pass",
        category=RuleCategory.STRING,
        implementation=email,
        examples=("email", "required,email"),
    ),
    RuleDefinition(
        name="size",
        description="String or collection must have exactly N elements",
        category=RuleCategory.COLLECTION,
        implementation=size,
        parameters=(_SIZE,),
        examples=("size=3",),
    ),
    RuleDefinition(
        name="minSize",
        description="String or collection must have at least N elements",
        category=RuleCategory.COLLECTION,
        implementation=min_size,
        parameters=(_SIZE,),
        examples=("minSize=1",),
    ),
    RuleDefinition(
        name="maxSize",
        description="String or collection must have at most N elements",
        category=RuleCategory.COLLECTION,
        implementation=max_size,
        parameters=(_SIZE,),
        examples=("maxSize=255", "minSize=1,maxSize=10"),
    ),
)
