"""Data models shared by the scanner and the document builder.

Schemas themselves stay plain dicts, since they are produced by the
external converter and mutated in place; only the values the generator
creates get a model.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS")


class CallDescriptor(BaseModel):
    """One annotated client function bound to an HTTP operation."""

    model_config = ConfigDict(frozen=True)

    description: str
    method: str  # GET / POST / PUT / ...
    path: str  # /post/list
    function_name: str
    request_schema: str
    response_schema: str

    @property
    def operation_key(self) -> str:
        """Lowercase method, as used under a path item."""
        return self.method.lower()


class PendingParameters(BaseModel):
    """Stands in for the query parameters of a GET operation until the
    named schema has been split out of the schema table."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["pending"] = "pending"
    schema_name: str
