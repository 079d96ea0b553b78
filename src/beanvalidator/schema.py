"""Explicit per-field rule schemas.

Records that carry no field metadata (JSON payloads, plain objects) are
validated against a RecordSchema: an ordered list of fields, each with
either an annotation string or a list of structured rule invocations.

Schemas can be written in YAML:

    name: Booking
    fields:
      guest: required,non-blank
      nights: positive,max=30
      arrival:
        - required
        - between: ["2024-01-01", "2024-12-31", "2006-01-02"]

Structured entries carry their parameter list directly, so rules whose
parameters would collide with the annotation's comma separator can be used.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from beanvalidator.parsing import parse_annotation, parse_rule
from beanvalidator.types import RuleInvocation, SchemaError


@dataclass(frozen=True)
class FieldRules:
    """Rules attached to one field.

    Attributes:
        name: Field name (mapping key or attribute name)
        annotation: Annotation string, parsed each time rules are requested
        invocations: Pre-split invocations, used when there is no annotation
    """

    name: str
    annotation: str | None = None
    invocations: tuple[RuleInvocation, ...] = ()

    def rule_invocations(self) -> list[RuleInvocation]:
        if self.annotation:
            return parse_annotation(self.annotation)
        return list(self.invocations)


@dataclass(frozen=True)
class RecordSchema:
    """Ordered field rules for one kind of record."""

    name: str
    fields: tuple[FieldRules, ...] = ()

    @classmethod
    def from_annotations(
        cls, annotations: Mapping[str, str], name: str = "record"
    ) -> "RecordSchema":
        """Build a schema from a field name -> annotation mapping."""
        return cls(
            name=name,
            fields=tuple(FieldRules(n, annotation=a) for n, a in annotations.items()),
        )

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]


def _param_text(value: Any) -> str:
    # YAML turns unquoted 2024-01-01 into a date; str() restores the text.
    return str(value)


def _parse_entry(field_name: str, entry: Any) -> RuleInvocation:
    """Convert one structured rule entry to a RuleInvocation.

    Accepted forms: "required", "min=18", {"min": 18},
    {"between": ["2024-01-01", "2024-12-31", "2006-01-02"]}, {"required": null}.
    """
    if isinstance(entry, str):
        return parse_rule(entry)

    if isinstance(entry, Mapping) and len(entry) == 1:
        ((name, params),) = entry.items()
        if params is None:
            return RuleInvocation(name=str(name))
        if isinstance(params, (list, tuple)):
            return RuleInvocation(
                name=str(name), params=tuple(_param_text(p) for p in params)
            )
        return RuleInvocation(name=str(name), params=(_param_text(params),))

    raise SchemaError(
        f"Field '{field_name}': rule entries must be a string or a "
        f"single-key mapping, got {entry!r}"
    )


def _parse_field(field_name: str, rules: Any) -> FieldRules:
    if rules is None:
        return FieldRules(name=field_name)
    if isinstance(rules, str):
        return FieldRules(name=field_name, annotation=rules)
    if isinstance(rules, list):
        return FieldRules(
            name=field_name,
            invocations=tuple(_parse_entry(field_name, e) for e in rules),
        )
    raise SchemaError(
        f"Field '{field_name}': rules must be an annotation string or a list, "
        f"got {type(rules).__name__}"
    )


def schema_from_dict(data: Any, default_name: str = "record") -> RecordSchema:
    """Build a RecordSchema from a parsed YAML/JSON document.

    Args:
        data: Mapping with an optional "name" and a "fields" mapping
        default_name: Name used when the document has none

    Raises:
        SchemaError: If the document does not have the expected shape
    """
    if not isinstance(data, Mapping):
        raise SchemaError(f"Schema must be a mapping, got {type(data).__name__}")

    fields = data.get("fields")
    if not isinstance(fields, Mapping):
        raise SchemaError("Schema must define 'fields' as a mapping of field name to rules")

    return RecordSchema(
        name=str(data.get("name") or default_name),
        fields=tuple(_parse_field(str(n), r) for n, r in fields.items()),
    )


def load_schema(path: Path) -> RecordSchema:
    """Load a RecordSchema from a YAML file.

    Raises:
        SchemaError: If the file cannot be parsed or has the wrong shape
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise SchemaError(f"{path}: YAML parse error: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SchemaError(f"{path}: file is not valid UTF-8: {exc}") from exc

    if data is None:
        raise SchemaError(f"{path}: file is empty")

    try:
        return schema_from_dict(data, default_name=Path(path).stem)
    except SchemaError as exc:
        raise SchemaError(f"{path}: {exc}") from exc
