"""Checks that every $ref in a generated document resolves."""

from typing import Iterator

SCHEMA_PREFIX = "#/components/schemas/"


def find_refs(node, location: str = "#") -> Iterator[tuple[str, str]]:
    """Yield (json_pointer, ref) for every $ref below node."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key == "$ref" and isinstance(value, str):
                yield location, value
            else:
                token = str(key).replace("~", "~0").replace("/", "~1")
                yield from find_refs(value, f"{location}/{token}")
    elif isinstance(node, list):
        for index, item in enumerate(node):
            yield from find_refs(item, f"{location}/{index}")


def validate_refs(document: dict) -> dict[str, str]:
    """Check local schema references.

    Returns dict of {location: error_message} for references that do not
    point into components.schemas.
    """
    schemas = document.get("components", {}).get("schemas", {})
    errors = {}
    for location, ref in find_refs(document):
        if not ref.startswith(SCHEMA_PREFIX):
            errors[location] = f"Unsupported reference {ref}"
            continue
        name = ref[len(SCHEMA_PREFIX):]
        if name not in schemas:
            errors[location] = f"Unknown schema {name}"
    return errors
