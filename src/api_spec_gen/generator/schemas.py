"""Cleans up converter output before it goes into the document."""

from api_spec_gen.config import GeneratorConfig
from api_spec_gen.generator.paths import schema_ref


def process_property(schema_name: str, prop_name: str, prop: dict, config: GeneratorConfig) -> None:
    """Clean the title, rewrite auth fields to the token schema and mark timestamp strings as date-time."""
    # The converter titles properties "<Schema>.<prop>"
    title = prop.get("title", prop_name).removeprefix(f"{schema_name}.")

    if prop_name in config.auth_fields:
        prop.pop("type", None)
        prop.update(schema_ref(config.auth_schema))

    if "$ref" in prop or title == prop_name:
        prop.pop("title", None)
    else:
        prop["title"] = title

    if prop_name in config.datetime_fields and prop.get("type") == "string":
        prop["format"] = "date-time"


def process_schemas(schemas: dict[str, dict], config: GeneratorConfig | None = None) -> None:
    """Post-process every schema's properties in place."""
    config = config or GeneratorConfig()
    for schema_name, schema in schemas.items():
        for prop_name, prop in (schema.get("properties") or {}).items():
            process_property(schema_name, prop_name, prop, config)
