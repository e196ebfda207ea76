"""Exceptions raised by the generator.

Library code raises these; the CLI turns them into a non-zero exit
with a readable message. Plain I/O errors are never wrapped.
"""


class GeneratorError(Exception):
    """Base class for all generator failures."""


class ConfigError(GeneratorError):
    """The configuration file is unreadable or holds invalid values."""


class ConverterError(GeneratorError):
    """The external TypeScript-to-OpenAPI converter failed."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr.strip():
            return f"{base}\n{self.stderr.strip()}"
        return base


class MissingSchemaError(GeneratorError):
    """A GET operation names a parameter schema the converter never produced."""

    def __init__(self, schema_name: str):
        super().__init__(f"Parameter schema {schema_name!r} not found in converter output")
        self.schema_name = schema_name


class PatchTargetError(GeneratorError, KeyError):
    """A patch points at a schema, property, path or method that does not exist."""

    def __init__(self, target: str):
        super().__init__(f"Patch target not found: {target}")
        self.target = target

    def __str__(self) -> str:
        return self.args[0]


class DanglingReferenceError(GeneratorError):
    """The finished document contains $ref values that resolve to nothing."""

    def __init__(self, errors: dict[str, str]):
        lines = [f"{location}: {message}" for location, message in errors.items()]
        super().__init__("Unresolved references:\n" + "\n".join(lines))
        self.errors = errors
