"""CLI entry point for api-spec-gen."""

import functools
import logging
import shlex
from pathlib import Path

import click
import yaml

from api_spec_gen.config import load_config
from api_spec_gen.errors import GeneratorError
from api_spec_gen.generator.document import generate as generate_document
from api_spec_gen.generator.patches import load_patches
from api_spec_gen.parser.client import derive_tag, read_client
from api_spec_gen.parser.types import combine_units, read_type_sources


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s [%(name)s] %(message)s")


def _fatal_errors(command):
    """Report generator, I/O and decoding failures as a one-line CLI error (exit code 1)."""

    @functools.wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except (GeneratorError, OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise click.ClickException(str(e)) from e

    return wrapper


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug).")
def main(verbose: int):
    """Build an OpenAPI document from TypeScript types and an HTTP client."""
    _configure_logging(verbose)


@main.command()
@click.argument("types_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument("client_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default="openapi.json", type=click.Path(path_type=Path), help="Output file for the OpenAPI JSON document.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML configuration file.")
@click.option("--patches", "patches_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML patch table (defaults to the built-in one).")
@click.option("--no-patches", is_flag=True, help="Skip the patch table entirely.")
@click.option("--work-dir", default=None, type=click.Path(file_okay=False, path_type=Path), help="Scratch directory for the converter.")
@click.option("--converter", default=None, help="Converter command line; {source} is replaced with the combined source file name.")
@_fatal_errors
def generate(types_dir: Path, client_file: Path, output: Path, config_path: Path | None,
             patches_path: Path | None, no_patches: bool, work_dir: Path | None, converter: str | None):
    """Generate the OpenAPI document."""
    config = load_config(
        config_path,
        work_dir=work_dir,
        converter_command=shlex.split(converter) if converter else None,
    )
    patches = {} if no_patches else load_patches(patches_path)

    click.echo(f"Generating from {types_dir} and {client_file}...")
    document = generate_document(types_dir, client_file, output, config, patches)

    click.echo(f"Found {len(document['paths'])} paths, {len(document['components']['schemas'])} schemas.")
    click.echo(f"OpenAPI document saved to {output}")


@main.command()
@click.argument("client_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_fatal_errors
def scan(client_file: Path):
    """List the annotated calls found in an HTTP client file."""
    calls = read_client(client_file)
    for call in calls:
        click.echo(
            f"{call.method} {call.path} -> {call.function_name} "
            f"({call.request_schema} -> {call.response_schema}) [{derive_tag(call.path)}]"
        )
    click.echo(f"Found {len(calls)} calls.")


@main.command()
@click.argument("types_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(path_type=Path), help="Output file for the combined TypeScript source.")
@_fatal_errors
def normalize(types_dir: Path, output: Path):
    """Write the combined, import-free type source the converter consumes."""
    sources = read_type_sources(types_dir)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(combine_units(sources), encoding="utf-8")
    click.echo(f"Combined {len(sources)} files into {output}")
