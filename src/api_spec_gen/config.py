"""Generator configuration.

Defaults reproduce the lemmy-js-client conventions; a YAML file can
override any field.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from api_spec_gen.errors import ConfigError

DEFAULT_CONVERTER_COMMAND = [
    "npx", "typeconv", "-v", "-f", "ts", "-t", "oapi", "--oapi-format", "json", "{source}",
]


class GeneratorConfig(BaseModel):
    """Settings for one generator run."""

    model_config = ConfigDict(extra="forbid")

    work_dir: Path = Path("temp")
    source_name: str = "types-all.ts"
    converter_command: list[str] = Field(default_factory=lambda: list(DEFAULT_CONVERTER_COMMAND))
    auth_schema: str = "AuthToken"
    auth_fields: set[str] = Field(default_factory=lambda: {"auth", "jwt"})
    datetime_fields: set[str] = Field(default_factory=lambda: {"when_", "published", "updated"})
    require_request_body: bool = False

    @field_validator("source_name")
    @classmethod
    def _check_source_name(cls, value: str) -> str:
        if not value.endswith(".ts") or "/" in value:
            raise ValueError("source_name must be a bare file name ending in .ts")
        return value

    @field_validator("converter_command")
    @classmethod
    def _check_command(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("converter_command must not be empty")
        return value

    @property
    def output_name(self) -> str:
        """File name the converter writes next to the combined source."""
        return Path(self.source_name).with_suffix(".json").name

    def converter_args(self) -> list[str]:
        return [arg.replace("{source}", self.source_name) for arg in self.converter_command]


def load_config(path: Path | None = None, **overrides) -> GeneratorConfig:
    """Load configuration from an optional YAML file.

    Keyword overrides whose value is None are ignored, so CLI options
    can be passed straight through.
    """
    data: dict = {}
    if path is not None:
        try:
            loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError(f"{path} must contain a mapping")
        data.update(loaded or {})

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return GeneratorConfig(**data)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
