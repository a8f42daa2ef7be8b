"""Data models for a fetched OpenAPI document and one analysed operation.

Every model is built fresh for a single tool call and discarded once the
text result has been produced.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class SpecificationDocument(BaseModel):
    """A parsed OpenAPI document and where it came from."""

    model_config = ConfigDict(frozen=True)

    source: str  # URL or file path
    raw: dict[str, Any]

    @property
    def paths(self) -> dict[str, Any]:
        paths = self.raw.get("paths")
        return paths if isinstance(paths, dict) else {}

    @property
    def has_paths(self) -> bool:
        return isinstance(self.raw.get("paths"), dict)

    @property
    def info(self) -> dict[str, Any]:
        info = self.raw.get("info")
        return info if isinstance(info, dict) else {}


class ParameterDescriptor(BaseModel):
    """A single operation parameter with its type and example resolved."""

    model_config = ConfigDict(frozen=True)

    name: str
    location: str  # path / query / header / cookie
    required: bool
    param_type: str  # "integer", "string (uuid)", "array of string", "Pet" ...
    description: str = ""
    example: str | None = None


class MediaTypeDescriptor(BaseModel):
    """One ``content`` entry of a request body."""

    model_config = ConfigDict(frozen=True)

    content_type: str
    schema_node: dict[str, Any] | None = None
    example: Any = None
    has_example: bool = False


class RequestBodyDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    required: bool = False
    description: str = ""
    content: list[MediaTypeDescriptor] = []


class OperationDescriptor(BaseModel):
    """Method, texts, parameters and body of one path template + method."""

    model_config = ConfigDict(frozen=True)

    method: str  # GET / POST / PUT / DELETE / PATCH
    path: str  # matched template, e.g. /pets/{petId}
    summary: str = ""
    description: str = ""
    parameters: list[ParameterDescriptor] = []
    request_body: RequestBodyDescriptor | None = None

    def parameters_in(self, location: str) -> list[ParameterDescriptor]:
        return [p for p in self.parameters if p.location == location]
