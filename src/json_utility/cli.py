"""Command-line interface for the JSON Utility."""

import logging
import sys
import click
import jsonschema
from pathlib import Path
from . import __version__
from .config import MapperConfig
from .json_utils import JSONUtils
from .utils.validation import ValidationUtils

_INPUT_FILE = click.Path(exists=True, dir_okay=False, path_type=Path)


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--indent', default=2, show_default=True, help='Indentation for pretty output')
@click.pass_context
def main(ctx: click.Context, verbose: bool, indent: int):
    """JSON Utility - Pretty-print, validate and convert JSON and XML documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )
    try:
        config = MapperConfig(indent=indent)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--indent")
    ctx.obj = JSONUtils(config)


@main.command()
@click.argument('input_file', type=_INPUT_FILE)
@click.pass_obj
def pretty(utils: JSONUtils, input_file: Path):
    """Pretty-print a JSON file."""
    json_content = _read(input_file)
    if not utils.is_valid(json_content):
        click.echo(f"❌ {input_file} is not valid JSON", err=True)
        sys.exit(1)
    click.echo(utils.pretty_print(json_content))


@main.command()
@click.argument('input_file', type=_INPUT_FILE)
@click.option('--schema', '-s', 'schema_file', type=_INPUT_FILE, help='JSON-Schema file to validate against')
@click.pass_obj
def validate(utils: JSONUtils, input_file: Path, schema_file: Path):
    """Check that a file is valid JSON, optionally against a schema."""
    json_content = _read(input_file)
    result = ValidationUtils.validate_json_string(json_content)
    if not result.is_valid:
        click.echo(f"❌ {input_file} is not valid JSON:", err=True)
        for line in ValidationUtils.format_errors(result):
            click.echo(f"   • {line}", err=True)
        sys.exit(1)

    for warning in result.warnings:
        click.echo(f"⚠️  {warning}", err=True)

    if schema_file is None:
        click.echo(f"✅ {input_file} is valid JSON")
        return

    try:
        violations = utils.schema_errors(json_content, _read(schema_file))
    except (jsonschema.SchemaError, ValueError) as e:
        click.echo(f"❌ Invalid schema {schema_file}: {e}", err=True)
        sys.exit(1)

    if violations:
        click.echo(f"❌ {input_file} does not match {schema_file}:", err=True)
        for violation in violations:
            click.echo(f"   • {violation}", err=True)
        sys.exit(1)

    click.echo(f"✅ {input_file} matches {schema_file}")


@main.command()
@click.argument('input_file', type=_INPUT_FILE)
@click.argument('key')
@click.pass_obj
def get(utils: JSONUtils, input_file: Path, key: str):
    """Print the value of a top-level field."""
    value = utils.get_field(_read(input_file), key)
    if value is None:
        click.echo(f"❌ Field '{key}' not found in {input_file}", err=True)
        sys.exit(1)
    click.echo(value)


@main.command(name='to-xml')
@click.argument('input_file', type=_INPUT_FILE)
@click.option('--root', '-r', help='Wrap the output in a root element')
@click.pass_obj
def to_xml(utils: JSONUtils, input_file: Path, root: str):
    """Convert a JSON object file to XML."""
    if root:
        try:
            utils = JSONUtils(utils.config.with_overrides(xml_root_tag=root))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--root")

    xml_content = utils.json_to_xml(_read(input_file))
    if xml_content is None:
        click.echo(f"❌ Could not convert {input_file} to XML", err=True)
        sys.exit(1)
    click.echo(xml_content)


@main.command(name='to-json')
@click.argument('input_file', type=_INPUT_FILE)
@click.option('--pretty', '-p', 'pretty_output', is_flag=True, help='Pretty-print the JSON output')
@click.pass_obj
def to_json(utils: JSONUtils, input_file: Path, pretty_output: bool):
    """Convert an XML file to JSON."""
    json_content = utils.xml_to_json(_read(input_file))
    if json_content is None:
        click.echo(f"❌ Could not convert {input_file} to JSON", err=True)
        sys.exit(1)
    click.echo(utils.pretty_print(json_content) if pretty_output else json_content)


if __name__ == '__main__':
    main()
