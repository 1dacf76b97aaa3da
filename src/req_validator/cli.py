#!/usr/bin/env python3
"""
CLI for validating request documents against parameter schemas.

Usage:
    reqval validate schema.yaml --input '{"query": {"page": "2"}}'
    reqval validate schema.yaml --input @request.json
    reqval validate schema.yaml --input @request.json --config settings.yaml
    reqval lint schema.yaml
    reqval --version
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
import yaml
from pydantic import ValidationError

from req_validator import __version__
from req_validator.errors import SchemaError
from req_validator.lint import lint_schema
from req_validator.middleware import RequestValidator
from req_validator.schema import read_schema_document
from req_validator.settings import ValidatorSettings, parse_validator_settings

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="reqval",
    help="Declarative request parameter validation",
    no_args_is_help=True,
    add_completion=False,
)


def parse_input(value: Optional[str]) -> Dict[str, Any]:
    """
    Parse a request document from JSON string or @file.json.

    Args:
        value: JSON string or @file.json path

    Returns:
        Parsed dictionary

    Raises:
        typer.Exit: On parse error
    """
    if value is None:
        return {}

    if value.startswith("@"):
        path = Path(value[1:])
        if not path.exists():
            typer.echo(f"Error: Input file not found: {path}", err=True)
            raise typer.Exit(1)
        text = path.read_text(encoding="utf-8")
    else:
        text = value

    try:
        result = json.loads(text)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: Invalid JSON in --input: {e}", err=True)
        raise typer.Exit(1)

    if not isinstance(result, dict):
        typer.echo(f"Error: Input must be a JSON object, got {type(result).__name__}", err=True)
        raise typer.Exit(1)
    return result


def load_schema_file(path: Path) -> Dict[str, Any]:
    """Read a schema document, exiting with an error message on failure."""
    if not path.exists():
        typer.echo(f"Error: Schema file not found: {path}", err=True)
        raise typer.Exit(1)
    try:
        return read_schema_document(path)
    except SchemaError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def load_settings_file(path: Optional[Path]) -> ValidatorSettings:
    """Read validator settings from the ``settings`` section of a YAML file."""
    if path is None:
        return ValidatorSettings()
    if not path.exists():
        typer.echo(f"Error: Config file not found: {path}", err=True)
        raise typer.Exit(1)
    try:
        config = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        typer.echo(f"Error: Invalid YAML in {path}: {e}", err=True)
        raise typer.Exit(1)
    if not isinstance(config, dict):
        typer.echo(f"Error: Config file {path} must contain a mapping", err=True)
        raise typer.Exit(1)

    section = config.get("settings")
    if section is not None and not isinstance(section, dict):
        typer.echo(f"Error: 'settings' in {path} must be a mapping", err=True)
        raise typer.Exit(1)

    try:
        return parse_validator_settings(section)
    except ValidationError as e:
        typer.echo(f"Error: Invalid validation settings: {e}", err=True)
        raise typer.Exit(1)


def setup_logging(verbose: int, quiet: bool):
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s"
    )


@app.command()
def validate(
    schema_file: Path = typer.Argument(..., help="Path to schema YAML/JSON file"),
    input: Optional[str] = typer.Option(None, "--input", "-i", help="Request document as JSON or @file.json"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with a settings.validation section"),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Increase verbosity (-v, -vv)"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
):
    """Validate a request document and print the accepted parameters."""
    setup_logging(verbose, quiet)

    document = load_schema_file(schema_file)
    settings = load_settings_file(config)
    try:
        validator = RequestValidator(document, settings=settings)
    except SchemaError as e:
        typer.echo(f"Error: Invalid schema: {e}", err=True)
        raise typer.Exit(1)

    source = parse_input(input)
    logger.info("Validating %d parameter(s) from %s", len(validator.schema.fields), schema_file)

    result = validator.validate(source)
    if not result.success:
        response = validator.reject(result.error, source)
        typer.echo(json.dumps(response), err=True)
        raise typer.Exit(1)

    if not quiet:
        typer.echo(json.dumps(result.data, indent=2))


@app.command()
def lint(
    schema_file: Path = typer.Argument(..., help="Path to schema YAML/JSON file"),
):
    """Check a schema file for authoring mistakes."""
    document = load_schema_file(schema_file)
    report = lint_schema(document)

    if not report["valid"]:
        for error in report["errors"]:
            location = error["path"] or "<root>"
            typer.echo(f"{location}: {error['message']}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ {schema_file} is valid")


def version_callback(value: bool):
    """Handle --version flag."""
    if value:
        typer.echo(f"reqval {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True,
                                 help="Show version and exit"),
):
    """Declarative request parameter validation."""


def main():
    """Entry point for the reqval CLI."""
    app()


if __name__ == "__main__":
    main()
