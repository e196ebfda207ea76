"""Turns pending parameter markers into query parameter lists.

A schema used as the argument of a GET call describes query
parameters, not a body, so it is consumed here and dropped from the
component schema table.
"""

import logging

from api_spec_gen.errors import MissingSchemaError
from api_spec_gen.parser.base import PendingParameters

logger = logging.getLogger(__name__)


def collect_pending(paths: dict[str, dict]) -> dict[str, list]:
    """Swap every pending marker for an empty list, one list per schema name.

    Operations that name the same schema share the same list object.
    """
    pending: dict[str, list] = {}
    for path_item in paths.values():
        operation = path_item.get("get")
        if operation is None:
            continue
        marker = operation.get("parameters")
        if not isinstance(marker, PendingParameters):
            continue
        params = pending.setdefault(marker.schema_name, [])
        operation["parameters"] = params
    return pending


def query_parameters(schema: dict) -> list[dict]:
    """One query parameter per schema property, in declared order."""
    required = set(schema.get("required") or [])
    return [
        {
            "in": "query",
            "name": name,
            "required": name in required,
            "schema": prop,
        }
        for name, prop in (schema.get("properties") or {}).items()
    ]


def resolve_parameters(paths: dict[str, dict], schemas: dict[str, dict]) -> set[str]:
    """Resolve all pending markers and prune the consumed schemas.

    Returns the names of the schemas that became parameters.
    """
    pending = collect_pending(paths)

    for schema_name, params in pending.items():
        if schema_name not in schemas:
            raise MissingSchemaError(schema_name)
        params.extend(query_parameters(schemas[schema_name]))

    for schema_name in pending:
        del schemas[schema_name]

    logger.info("Resolved %d parameter schemas", len(pending))
    return set(pending)
