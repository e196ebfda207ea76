"""Manual overrides layered on top of the generated document.

The patch table is plain YAML with two sections::

    components:
      schemas:
        Site:
          title: ...            # optional
          example: ...          # optional
          properties:
            actor_id: {$ref: "#/components/schemas/SiteActorId"}   # replaces
            name: {example: Lemmy Site}                             # merges
    paths:
      /user/login:
        post:
          responses:
            "400": {...}

A ``null`` value in a merged property patch removes that key.
"""

import copy
from pathlib import Path

import yaml

from api_spec_gen.errors import PatchTargetError

DEFAULT_PATCHES = Path(__file__).parent.parent / "data" / "patches.yaml"


def load_patches(file_path: Path | None = None) -> dict:
    """Load a patch table; defaults to the one shipped with the package."""
    text = (file_path or DEFAULT_PATCHES).read_text(encoding="utf-8")
    return yaml.safe_load(text) or {}


def _merge_property(current: dict, patch: dict) -> dict:
    merged = {**current, **copy.deepcopy(patch)}
    return {key: value for key, value in merged.items() if value is not None}


def apply_schema_patches(document: dict, patches: dict) -> None:
    schemas = document["components"]["schemas"]
    schema_patches = (patches.get("components") or {}).get("schemas") or {}

    for schema_name, patch in schema_patches.items():
        if schema_name not in schemas:
            raise PatchTargetError(f"components.schemas.{schema_name}")
        schema = schemas[schema_name]

        if patch.get("title"):
            schema["title"] = patch["title"]
        if patch.get("example") is not None:
            schema["example"] = copy.deepcopy(patch["example"])

        prop_patches = patch.get("properties") or {}
        if prop_patches and "properties" not in schema:
            raise PatchTargetError(f"components.schemas.{schema_name}.properties")

        for prop_name, prop_patch in prop_patches.items():
            if "$ref" in prop_patch:
                schema["properties"][prop_name] = copy.deepcopy(prop_patch)
            else:
                current = schema["properties"].get(prop_name, {})
                schema["properties"][prop_name] = _merge_property(current, prop_patch)


def apply_path_patches(document: dict, patches: dict) -> None:
    paths = document["paths"]
    for path, methods in (patches.get("paths") or {}).items():
        if path not in paths:
            raise PatchTargetError(f"paths.{path}")
        for method, method_patch in methods.items():
            if method not in paths[path]:
                raise PatchTargetError(f"paths.{path}.{method}")
            operation = paths[path][method]
            # YAML keys may load as ints; the document uses string status codes
            extra = {str(code): copy.deepcopy(resp) for code, resp in (method_patch.get("responses") or {}).items()}
            operation["responses"] = {**operation.get("responses", {}), **extra}


def apply_patches(document: dict, patches: dict) -> dict:
    """Apply schema patches, then path patches. Mutates and returns the document."""
    apply_schema_patches(document, patches)
    apply_path_patches(document, patches)
    return document
