"""Rules command: list the registered validation rules."""

import json

import click

from beanvalidator.rules import DEFAULT_REGISTRY
from beanvalidator.types import RuleCategory


@click.command()
@click.option(
    "--category",
    type=click.Choice([c.value for c in RuleCategory]),
    default=None,
    help="Only list rules in this category.",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the rule documentation as JSON.",
)
def rules(category: str | None, as_json: bool):
    """List the built-in validation rules."""
    categories = [RuleCategory(category)] if category else list(RuleCategory)

    if as_json:
        docs = DEFAULT_REGISTRY.export_documentation()
        if category:
            docs = {"rules": {r["name"]: r for r in docs["byCategory"].get(category, [])}}
        click.echo(json.dumps(docs, indent=2))
        return

    for cat in categories:
        rule_defs = sorted(DEFAULT_REGISTRY.list_by_category(cat), key=lambda r: r.name)
        if not rule_defs:
            continue
        click.echo(click.style(cat.value.capitalize(), bold=True))
        for rule_def in rule_defs:
            params = ",".join(p.name for p in rule_def.parameters)
            usage = f"{rule_def.name}={params}" if params else rule_def.name
            click.echo(f"  {usage:<32} {rule_def.description}")
