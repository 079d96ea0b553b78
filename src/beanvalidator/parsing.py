"""Field annotation parsing.

An annotation is a comma-separated list of rule invocations, each either
``name`` or ``name=param1,param2``:

    "required,min=18,max=100"

The annotation is split on ``,`` first and every token on its first ``=``,
so a parameter can never contain a comma. Rules with several parameters
(``after``, ``before``, ``between``) therefore need a structured schema
rather than an annotation string. Tokens are used as written; whitespace
is not trimmed.
"""

from beanvalidator.types import RuleInvocation


def parse_rule(token: str) -> RuleInvocation:
    """Split one annotation token into a rule name and its parameters.

    >>> parse_rule("min=18")
    RuleInvocation(name='min', params=('18',))
    >>> parse_rule("required")
    RuleInvocation(name='required', params=())
    """
    name, sep, raw_params = token.partition("=")
    if not sep:
        return RuleInvocation(name=name)
    return RuleInvocation(name=name, params=tuple(raw_params.split(",")))


def parse_annotation(annotation: str) -> list[RuleInvocation]:
    """Parse a full annotation into rule invocations, in listed order."""
    return [parse_rule(token) for token in annotation.split(",")]
