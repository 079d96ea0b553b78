"""Struct walker: applies field annotations to a record.

Fields are discovered from the record itself (dataclass field metadata or
pydantic ``json_schema_extra``) or taken from an explicit RecordSchema.
Every rule of every annotated field runs; failures are collected, never
raised.

Usage:
    @dataclass
    class User:
        name: str = validated_field("required,non-blank")
        age: int = validated_field("min=18,max=100")

    errors = validate(User(name="  ", age=16))
    if errors.has_errors:
        print(errors.message)
"""

import dataclasses
import logging
import weakref
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from beanvalidator.config import ValidatorConfig
from beanvalidator.registry import RuleRegistry
from beanvalidator.rules import DEFAULT_REGISTRY
from beanvalidator.schema import FieldRules, RecordSchema
from beanvalidator.types import RecordShapeError, ValidationError, ValidationErrors

logger = logging.getLogger(__name__)

# Values that can never be records, even with an explicit schema.
_SCALAR_TYPES = (str, bytes, bytearray, int, float, complex, list, tuple, set, frozenset)


class Validator:
    """Validates records against their field annotations.

    The rule registry is injected so callers can validate with their own
    rules without changing the shared DEFAULT_REGISTRY.

    Example:
        validator = Validator(DEFAULT_REGISTRY.extend(slug_rule))
        errors = validator.validate(article)
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        config: ValidatorConfig | None = None,
    ):
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.config = config or ValidatorConfig()

    def validate(self, record: Any, schema: RecordSchema | None = None) -> ValidationErrors:
        """Validate a record and return every failure.

        Args:
            record: Dataclass or pydantic model instance, or (with a schema)
                any mapping or object. A weakref.ref is dereferenced first.
            schema: Explicit field rules; required for records without
                field metadata

        Returns:
            Errors in field declaration order, then rule order. Empty means valid.

        Raises:
            RecordShapeError: If the record cannot be validated at all
        """
        record = _resolve(record, with_schema=schema is not None)
        fields = list(schema.fields) if schema is not None else self.describe(record)

        logger.debug("Validating %s (%d fields)", type(record).__name__, len(fields))

        errors = ValidationErrors()
        for field_rules in fields:
            if field_rules.name.startswith("_"):
                continue

            invocations = field_rules.rule_invocations()
            if not invocations:
                continue

            value = _read_value(record, field_rules.name)
            for invocation in invocations:
                rule = self.registry.get(invocation.name)
                if rule is None:
                    logger.warning(
                        "Unknown validation rule %r on field %s",
                        invocation.name,
                        field_rules.name,
                    )
                    errors.append(ValidationError(
                        field=field_rules.name,
                        message=f"unknown validation rule: {invocation.name}",
                    ))
                    continue

                message = rule(field_rules.name, value, *invocation.params)
                if message is not None:
                    errors.append(ValidationError(field=field_rules.name, message=message))

        return errors

    def describe(self, record: Any) -> list[FieldRules]:
        """Read the annotated fields of a dataclass or pydantic model instance.

        Raises:
            RecordShapeError: If the record is neither
        """
        tag_key = self.config.tag_key

        if dataclasses.is_dataclass(record) and not isinstance(record, type):
            return [
                FieldRules(f.name, annotation=_annotation(f.name, f.metadata.get(tag_key)))
                for f in dataclasses.fields(record)
            ]

        if isinstance(record, BaseModel):
            described = []
            for name, info in type(record).model_fields.items():
                extra = info.json_schema_extra
                raw = extra.get(tag_key) if isinstance(extra, dict) else None
                described.append(FieldRules(name, annotation=_annotation(name, raw)))
            return described

        raise RecordShapeError(
            "validate: input must be a dataclass or pydantic model instance, "
            f"or be paired with a schema (got {type(record).__name__})"
        )


def _annotation(field_name: str, raw: Any) -> str | None:
    if raw is None or isinstance(raw, str):
        return raw
    raise RecordShapeError(
        f"validate: annotation for field {field_name} must be a string, "
        f"got {type(raw).__name__}"
    )


def _resolve(record: Any, with_schema: bool) -> Any:
    """Dereference weak references and reject values that are not records."""
    if isinstance(record, weakref.ref):
        target = record()
        if target is None:
            raise RecordShapeError("validate: weak reference target no longer exists")
        record = target

    if record is None or isinstance(record, type):
        raise RecordShapeError(
            f"validate: input must be a record instance (got {record!r})"
        )

    if with_schema and isinstance(record, _SCALAR_TYPES):
        raise RecordShapeError(
            f"validate: input must be a mapping or object (got {type(record).__name__})"
        )

    return record


def _read_value(record: Any, name: str) -> Any:
    """Current value of a field; None when the record has no such field."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def validated_field(annotation: str, *, tag_key: str | None = None, **kwargs: Any) -> Any:
    """A dataclasses.field() carrying a rule annotation.

    Args:
        annotation: Rules such as "required,min=18"
        tag_key: Metadata key; defaults to the configured key
        **kwargs: Passed through to dataclasses.field()
    """
    key = tag_key or ValidatorConfig.from_env().tag_key
    metadata = {**kwargs.pop("metadata", {}), key: annotation}
    return dataclasses.field(metadata=metadata, **kwargs)


def validate(
    record: Any,
    schema: RecordSchema | None = None,
    registry: RuleRegistry | None = None,
) -> ValidationErrors:
    """Validate a record with the default registry and environment config."""
    return Validator(registry, ValidatorConfig.from_env()).validate(record, schema)
