"""Typed view over raw JSON schema nodes.

A raw schema dict is classified once into one of the ``SchemaNode`` variants
so the describer and the example synthesizer can dispatch on the variant
instead of probing for fields. References are kept as ``RefSchema`` and are
never followed here.
"""

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)

    description: str = ""
    enum: list[Any] | None = None
    example: Any = None
    has_example: bool = False


class RefSchema(_Node):
    kind: Literal["ref"] = "ref"
    ref: str

    @property
    def name(self) -> str:
        """Trailing pointer segment, e.g. ``Pet`` for ``#/components/schemas/Pet``."""
        return self.ref.rsplit("/", 1)[-1]


class ObjectSchema(_Node):
    kind: Literal["object"] = "object"
    properties: dict[str, "SchemaNode"] = {}
    required: list[str] = []
    has_properties: bool = False

    def is_required(self, name: str) -> bool:
        return name in self.required


class ArraySchema(_Node):
    kind: Literal["array"] = "array"
    items: "SchemaNode | None" = None


class PrimitiveSchema(_Node):
    kind: Literal["primitive"] = "primitive"
    type: str  # string / integer / number / boolean
    format: str | None = None


class UnknownSchema(_Node):
    kind: Literal["unknown"] = "unknown"


SchemaNode = Union[RefSchema, ObjectSchema, ArraySchema, PrimitiveSchema, UnknownSchema]

ObjectSchema.model_rebuild()
ArraySchema.model_rebuild()


def _schema_type(raw: dict) -> str | None:
    value = raw.get("type")
    if isinstance(value, list):
        # OpenAPI 3.1 style: ["string", "null"]
        value = next((t for t in value if t != "null"), None)
    return value if isinstance(value, str) else None


def parse_schema(raw: Any) -> SchemaNode:
    """Classify a raw schema dict into its ``SchemaNode`` variant."""
    if not isinstance(raw, dict):
        return UnknownSchema()

    common: dict[str, Any] = {}
    if isinstance(raw.get("description"), str):
        common["description"] = raw["description"]
    if isinstance(raw.get("enum"), list):
        common["enum"] = raw["enum"]
    if "example" in raw:
        common["example"] = raw["example"]
        common["has_example"] = True

    ref = raw.get("$ref")
    if isinstance(ref, str):
        return RefSchema(ref=ref, **common)

    schema_type = _schema_type(raw)
    properties = raw.get("properties")

    if schema_type == "object" or (schema_type is None and isinstance(properties, dict)):
        required = raw.get("required")
        return ObjectSchema(
            properties={
                name: parse_schema(prop) for name, prop in (properties or {}).items()
            } if isinstance(properties, dict) else {},
            required=[r for r in required if isinstance(r, str)] if isinstance(required, list) else [],
            has_properties=isinstance(properties, dict),
            **common,
        )

    if schema_type == "array":
        items = raw.get("items")
        return ArraySchema(items=parse_schema(items) if items is not None else None, **common)

    if schema_type is not None:
        fmt = raw.get("format")
        return PrimitiveSchema(type=schema_type, format=fmt if isinstance(fmt, str) else None, **common)

    return UnknownSchema(**common)


def type_label(node: SchemaNode) -> str:
    """Human-readable type string used in parameter and property lines."""
    if isinstance(node, RefSchema):
        return node.name
    if isinstance(node, ArraySchema):
        return f"array of {type_label(node.items)}" if node.items is not None else "array"
    if isinstance(node, ObjectSchema):
        return "object"
    if isinstance(node, PrimitiveSchema):
        return f"{node.type} ({node.format})" if node.format else node.type
    return "unknown"
