"""Assembles the final OpenAPI document."""

import copy
import json
import logging
from functools import lru_cache
from pathlib import Path

import yaml

from api_spec_gen.config import GeneratorConfig
from api_spec_gen.errors import DanglingReferenceError
from api_spec_gen.generator.converter import extract_schemas
from api_spec_gen.generator.parameters import resolve_parameters
from api_spec_gen.generator.patches import apply_patches, load_patches
from api_spec_gen.generator.paths import build_paths
from api_spec_gen.generator.schemas import process_schemas
from api_spec_gen.generator.validator import validate_refs
from api_spec_gen.parser.base import CallDescriptor
from api_spec_gen.parser.client import read_client
from api_spec_gen.parser.types import combine_units, read_type_sources

logger = logging.getLogger(__name__)

TEMPLATE_PATH = Path(__file__).parent.parent / "data" / "template.yaml"


@lru_cache(maxsize=1)
def _template() -> dict:
    return yaml.safe_load(TEMPLATE_PATH.read_text(encoding="utf-8"))


def load_template() -> dict:
    """Fresh copy of the fixed document skeleton."""
    return copy.deepcopy(_template())


def collect_tags(paths: dict[str, dict]) -> list[dict]:
    names = {tag for path_item in paths.values() for op in path_item.values() for tag in op.get("tags", [])}
    return [{"name": name} for name in sorted(names)]


def build_document(
    schemas: dict[str, dict],
    calls: list[CallDescriptor],
    config: GeneratorConfig | None = None,
    patches: dict | None = None,
) -> dict:
    """Build the document from a converter schema table and scanned calls.

    The schema table is consumed: its dicts are mutated and moved into
    the document.
    """
    config = config or GeneratorConfig()
    document = load_template()

    paths = build_paths(calls, config)
    process_schemas(schemas, config)
    resolve_parameters(paths, schemas)

    document["paths"] = paths
    document["components"]["schemas"].update(schemas)
    document["tags"] = collect_tags(paths)

    if patches:
        apply_patches(document, patches)

    errors = validate_refs(document)
    if errors:
        raise DanglingReferenceError(errors)
    return document


def write_document(document: dict, output: Path) -> None:
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def generate(
    types_dir: Path,
    client_file: Path,
    output: Path,
    config: GeneratorConfig | None = None,
    patches: dict | None = None,
) -> dict:
    """Full run: normalize types, convert, scan the client, build and write.

    The output file is only written once everything else has succeeded.
    """
    config = config or GeneratorConfig()
    if patches is None:
        patches = load_patches()

    combined = combine_units(read_type_sources(types_dir))
    schemas = extract_schemas(combined, config)
    calls = read_client(client_file)

    document = build_document(schemas, calls, config, patches)
    write_document(document, output)
    logger.info("Wrote %d paths to %s", len(document["paths"]), output)
    return document
