"""bean-validator CLI entry point."""

import logging

import click

from beanvalidator.config import ValidatorConfig


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """bean-validator: declarative field validation CLI."""
    config = ValidatorConfig.from_env()
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.logging_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


# Register subcommands
from beanvalidator.cli.check_cmd import check  # noqa: E402
from beanvalidator.cli.rules_cmd import rules  # noqa: E402

cli.add_command(check)
cli.add_command(rules)
