"""Check command: validate payload files against a rule schema."""

import json
from pathlib import Path
from typing import Any, NoReturn

import click
import yaml

from beanvalidator.config import ValidatorConfig
from beanvalidator.schema import load_schema
from beanvalidator.types import RecordShapeError, SchemaError
from beanvalidator.walker import Validator


def _load_payload(path: Path) -> Any:
    """Load a JSON or YAML payload.

    JSON files are read with the json module so that date strings stay
    strings; in YAML payloads dates must be quoted for the same reason.
    """
    with open(path, encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f)


def _fail(message: str) -> NoReturn:
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    raise SystemExit(2)


@click.command()
@click.argument(
    "schema_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument(
    "payload_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print results as JSON.",
)
@click.pass_obj
def check(config: ValidatorConfig | None, schema_path: Path, payload_path: Path, as_json: bool):
    """Validate the record(s) in PAYLOAD_PATH against SCHEMA_PATH.

    The payload may hold a single mapping or a list of mappings.
    """
    try:
        schema = load_schema(schema_path)
    except SchemaError as e:
        _fail(str(e))

    try:
        payload = _load_payload(payload_path)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        _fail(f"{payload_path}: cannot parse payload: {e}")

    records = payload if isinstance(payload, list) else [payload]
    validator = Validator(config=config)

    try:
        results = [validator.validate(record, schema) for record in records]
    except RecordShapeError as e:
        _fail(f"{payload_path}: {e}")

    failed = sum(1 for r in results if r.has_errors)

    if as_json:
        click.echo(json.dumps(
            {
                "schema": schema.name,
                "valid": failed == 0,
                "results": [r.to_dict() for r in results],
            },
            indent=2,
        ))
    else:
        for index, errors in enumerate(results, start=1):
            if not errors.has_errors:
                continue
            click.echo(f"Record {index} ({schema.name}):")
            for error in errors:
                click.echo(click.style(f"  - {error}", fg="red"))

        if failed:
            click.echo(
                click.style(
                    f"\n{failed} of {len(results)} record(s) failed validation",
                    fg="red",
                    bold=True,
                )
            )
        else:
            click.echo(
                click.style(f"All {len(results)} record(s) are valid.", fg="green", bold=True)
            )

    if failed:
        raise SystemExit(1)
