"""Builds the OpenAPI ``paths`` object from scanned call descriptors."""

import logging
from typing import Iterable

from api_spec_gen.config import GeneratorConfig
from api_spec_gen.parser.base import CallDescriptor, PendingParameters
from api_spec_gen.parser.client import derive_tag

logger = logging.getLogger(__name__)


def schema_ref(name: str) -> dict:
    return {"$ref": f"#/components/schemas/{name}"}


def json_content(name: str) -> dict:
    return {"application/json": {"schema": schema_ref(name)}}


def build_operation(call: CallDescriptor, config: GeneratorConfig | None = None) -> dict:
    """Build one operation object.

    GET operations get a PendingParameters marker in place of their
    parameter list; every other method sends the request schema as a
    JSON body.
    """
    config = config or GeneratorConfig()
    operation: dict = {
        "tags": [derive_tag(call.path)],
        "description": call.description,
        "operationId": call.function_name,
    }

    if call.operation_key == "get":
        operation["parameters"] = PendingParameters(schema_name=call.request_schema)
    else:
        body: dict = {"content": json_content(call.request_schema)}
        if config.require_request_body:
            body["required"] = True
        operation["requestBody"] = body

    operation["responses"] = {
        "200": {
            "description": "OK",
            "content": json_content(call.response_schema),
        },
    }
    return operation


def build_paths(calls: Iterable[CallDescriptor], config: GeneratorConfig | None = None) -> dict[str, dict]:
    """Merge operations into a path map; a repeated path + method keeps the last one."""
    paths: dict[str, dict] = {}
    for call in calls:
        path_item = paths.setdefault(call.path, {})
        if call.operation_key in path_item:
            logger.debug(
                "%s %s redefined by %s", call.method, call.path, call.function_name
            )
        path_item[call.operation_key] = build_operation(call, config)
    return paths
