"""Date rules.

Rules:
- date, date-format: value parses under the given layout
- after, before, between: comparison against reference dates
- past, future, pastInclusive, futureInclusive: comparison against the clock

Layouts are written with the reference date ``2006-01-02 15:04:05`` (for
example ``02/01/2006``) and translated to ``strptime`` directives. A layout
that already contains ``%`` is passed to ``strptime`` unchanged. Values
parsed without a zone are taken as UTC.
"""

import re
from datetime import datetime, timezone
from typing import Any

from beanvalidator.types import RuleCategory, RuleDefinition, RuleParameter

# (token, strptime directive, shape of the value text). Checked in order at
# every position of the layout, so longer tokens that share a prefix with
# shorter ones come first. Zero-padded tokens take exactly their width.
_LAYOUT_TOKENS: tuple[tuple[str, str, str], ...] = (
    ("January", "%B", "[A-Za-z]+"),
    ("Jan", "%b", "[A-Za-z]+"),
    ("Monday", "%A", "[A-Za-z]+"),
    ("Mon", "%a", "[A-Za-z]+"),
    ("MST", "%Z", "[A-Za-z]+"),
    ("2006", "%Y", "[0-9]{4}"),
    ("Z07:00", "%z", ".+?"),
    ("Z0700", "%z", ".+?"),
    ("-07:00", "%z", ".+?"),
    ("-0700", "%z", ".+?"),
    ("002", "%j", "[0-9]{3}"),
    ("01", "%m", "[0-9]{2}"),
    ("02", "%d", "[0-9]{2}"),
    ("03", "%I", "[0-9]{2}"),
    ("04", "%M", "[0-9]{2}"),
    ("05", "%S", "[0-9]{2}"),
    ("06", "%y", "[0-9]{2}"),
    ("15", "%H", "[0-9]{1,2}"),
    ("PM", "%p", "[AaPp][Mm]"),
    ("pm", "%p", "[AaPp][Mm]"),
    ("1", "%m", "[0-9]{1,2}"),
    ("2", "%d", "[0-9]{1,2}"),
    ("3", "%I", "[0-9]{1,2}"),
    ("4", "%M", "[0-9]{1,2}"),
    ("5", "%S", "[0-9]{1,2}"),
)


def _translate(layout: str) -> tuple[str, str]:
    """Return the strptime format and the value pattern for a layout."""
    fmt: list[str] = []
    shape: list[str] = []
    i = 0
    while i < len(layout):
        for token, directive, pattern in _LAYOUT_TOKENS:
            if layout.startswith(token, i):
                fmt.append(directive)
                shape.append(pattern)
                i += len(token)
                break
        else:
            char = layout[i]
            fmt.append("%%" if char == "%" else char)
            shape.append(re.escape(char))
            i += 1
    return "".join(fmt), "".join(shape)


def translate_layout(layout: str) -> str:
    """Translate a reference-date layout into a strptime format.

    >>> translate_layout("2006-01-02")
    '%Y-%m-%d'
    >>> translate_layout("Jan 2, 2006 3:04PM")
    '%b %d, %Y %I:%M%p'
    """
    return _translate(layout)[0]


def parse_date(value: str, layout: str) -> datetime:
    """Parse a date string under a layout.

    strptime accepts one-digit months and days for %m and %d, so values
    for reference layouts are first matched against the layout's shape:
    ``01`` and ``02`` need two digits, while ``1`` and ``2`` take one or two.

    Raises:
        ValueError: If the value does not match the layout
    """
    if "%" in layout:
        fmt = layout
    else:
        fmt, shape = _translate(layout)
        if not re.fullmatch(shape, value):
            raise ValueError(f"{value!r} does not match layout {layout!r}")
    parsed = datetime.strptime(value, fmt)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def utcnow() -> datetime:
    """Current instant. Tests patch this to pin the clock."""
    return datetime.now(timezone.utc)


def _today() -> datetime:
    """Current UTC instant truncated to midnight."""
    return utcnow().replace(hour=0, minute=0, second=0, microsecond=0)


def _parse_value(
    field_name: str, value: Any, layout: str
) -> tuple[datetime | None, str | None]:
    """Parse a field value. Returns (parsed, None) or (None, error message)."""
    if not isinstance(value, str):
        return None, f"{field_name} must be a string representing a date"
    try:
        return parse_date(value, layout), None
    except ValueError:
        return None, f"{field_name} must match the format {layout}"


def _parse_reference(value: str, layout: str) -> datetime | None:
    try:
        return parse_date(value, layout)
    except ValueError:
        return None


# -----------------------------------------------------------------------------
# Format Rules
# -----------------------------------------------------------------------------


def date_rule(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "date rule requires a format parameter (e.g., '2006-01-02')"
    _, error = _parse_value(field_name, value, params[0])
    return error


def date_format_rule(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "date-format rule requires a format parameter"
    _, error = _parse_value(field_name, value, params[0])
    return error


# -----------------------------------------------------------------------------
# Reference Date Rules
# -----------------------------------------------------------------------------


def after(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 2:
        return (
            "after rule requires a reference date and format "
            "(e.g., '2024-01-01,2006-01-02')"
        )
    ref_str, layout = params[0], params[1]

    parsed, error = _parse_value(field_name, value, layout)
    if error:
        return error

    ref = _parse_reference(ref_str, layout)
    if ref is None:
        return f"invalid reference date for {field_name}"

    if not parsed > ref:
        return f"{field_name} must be after {ref_str}"
    return None


def before(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 2:
        return (
            "before rule requires a reference date and format "
            "(e.g., '2024-01-01,2006-01-02')"
        )
    ref_str, layout = params[0], params[1]

    parsed, error = _parse_value(field_name, value, layout)
    if error:
        return error

    ref = _parse_reference(ref_str, layout)
    if ref is None:
        return f"invalid reference date for {field_name}"

    if not parsed < ref:
        return f"{field_name} must be before {ref_str}"
    return None


def between(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 3:
        return (
            "between rule requires a start date, end date, and format "
            "(e.g., '2024-01-01,2024-12-31,2006-01-02')"
        )
    start_str, end_str, layout = params[0], params[1], params[2]

    parsed, error = _parse_value(field_name, value, layout)
    if error:
        return error

    start = _parse_reference(start_str, layout)
    if start is None:
        return f"invalid start date for {field_name}"

    end = _parse_reference(end_str, layout)
    if end is None:
        return f"invalid end date for {field_name}"

    if parsed < start or parsed > end:
        return f"{field_name} must be between {start_str} and {end_str}"
    return None


# -----------------------------------------------------------------------------
# Clock Rules
# -----------------------------------------------------------------------------


def past(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "past rule requires a format parameter (e.g., '2006-01-02')"
    parsed, error = _parse_value(field_name, value, params[0])
    if error:
        return error
    if not parsed < _today():
        return f"{field_name} must be in the past"
    return None


def future(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "future rule requires a format parameter (e.g., '2006-01-02')"
    parsed, error = _parse_value(field_name, value, params[0])
    if error:
        return error
    if not parsed > _today():
        return f"{field_name} must be in the future"
    return None


def past_inclusive(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "past-inclusive rule requires a format parameter (e.g., '2006-01-02')"
    parsed, error = _parse_value(field_name, value, params[0])
    if error:
        return error
    # Compared with the current instant, not with midnight.
    if parsed > utcnow():
        return f"{field_name} must be in the past or today"
    return None


def future_inclusive(field_name: str, value: Any, *params: str) -> str | None:
    if len(params) < 1:
        return "future-inclusive rule requires a format parameter (e.g., '2006-01-02')"
    parsed, error = _parse_value(field_name, value, params[0])
    if error:
        return error
    if parsed < _today():
        return f"{field_name} must be in the future or today"
    return None


# -----------------------------------------------------------------------------
# Definitions
# -----------------------------------------------------------------------------

_LAYOUT = RuleParameter("layout", "format", "Reference layout such as 2006-01-02, or a strptime format")
_REFERENCE = RuleParameter("reference", "date", "Reference date written in the layout")

DATE_RULES: tuple[RuleDefinition, ...] = (
    RuleDefinition(
        name="date",
        description="String must parse as a date under the layout",
        category=RuleCategory.DATE,
        implementation=date_rule,
        parameters=(_LAYOUT,),
        examples=("date=2006-01-02",),
    ),
    RuleDefinition(
        name="date-format",
        description="Same as date",
        category=RuleCategory.DATE,
        implementation=date_format_rule,
        parameters=(_LAYOUT,),
        examples=("date-format=02/01/2006",),
    ),
    RuleDefinition(
        name="after",
        description="Date must be strictly after the reference date",
        category=RuleCategory.DATE,
        implementation=after,
        parameters=(_REFERENCE, _LAYOUT),
    ),
    RuleDefinition(
        name="before",
        description="Date must be strictly before the reference date",
        category=RuleCategory.DATE,
        implementation=before,
        parameters=(_REFERENCE, _LAYOUT),
    ),
    RuleDefinition(
        name="between",
        description="Date must fall within the start and end dates, inclusive",
        category=RuleCategory.DATE,
        implementation=between,
        parameters=(
            RuleParameter("start", "date", "First allowed date"),
            RuleParameter("end", "date", "Last allowed date"),
            _LAYOUT,
        ),
    ),
    RuleDefinition(
        name="past",
        description="Date must be before today",
        category=RuleCategory.DATE,
        implementation=past,
        parameters=(_LAYOUT,),
        examples=("past=2006-01-02",),
    ),
    RuleDefinition(
        name="future",
        description="Date must be after today",
        category=RuleCategory.DATE,
        implementation=future,
        parameters=(_LAYOUT,),
        examples=("future=2006-01-02",),
    ),
    RuleDefinition(
        name="pastInclusive",
        description="Date must not be later than the current instant",
        category=RuleCategory.DATE,
        implementation=past_inclusive,
        parameters=(_LAYOUT,),
        examples=("pastInclusive=2006-01-02",),
    ),
    RuleDefinition(
        name="futureInclusive",
        description="Date must be today or later",
        category=RuleCategory.DATE,
        implementation=future_inclusive,
        parameters=(_LAYOUT,),
        examples=("futureInclusive=2006-01-02",),
    ),
)
