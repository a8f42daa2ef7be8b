"""Example synthesizer: representative values for schemas without an example.

Explicit ``example`` fields always win. Otherwise values are generated from
the schema type. Objects are generated one level deep: nested object
properties get a fixed one-key placeholder instead of their own expansion.
"""

import logging
from typing import Any

from openapi_analyzer.codec import JsonCodec
from openapi_analyzer.errors import AnalysisError
from openapi_analyzer.parser.refs import RefGuard, deref, resolve_ref
from openapi_analyzer.parser.schema import (
    ArraySchema,
    ObjectSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
    UnknownSchema,
    parse_schema,
)

logger = logging.getLogger(__name__)

EXAMPLE_NUMBER = 42
EXAMPLE_STRING = "example"
EXAMPLE_ARRAY = ["item1", "item2"]
NESTED_OBJECT_PLACEHOLDER = {"nestedProperty": "value"}
FALLBACK_EXAMPLE = {"example": "value"}

FORMAT_EXAMPLES = {
    "date-time": "2023-01-01T12:00:00Z",
    "date": "2023-01-01",
    "uuid": "123e4567-e89b-12d3-a456-426614174000",
}

_SKIP = object()


class ExampleSynthesizer:
    """Generates example values against one specification document."""

    def __init__(self, document: dict[str, Any], codec: JsonCodec | None = None):
        self.document = document
        self.codec = codec or JsonCodec()

    def synthesize(self, schema: SchemaNode | dict[str, Any]) -> Any:
        """Example value for a schema. Never raises; falls back to a fixed placeholder."""
        node = schema if not isinstance(schema, dict) else parse_schema(schema)
        try:
            return self._value(node, RefGuard())
        except AnalysisError as e:
            logger.debug(f"Failed to generate example: {e}")
            return dict(FALLBACK_EXAMPLE)

    def parameter_example(self, param: dict[str, Any]) -> str | None:
        """Rendered example for a raw parameter object, or None when the type is unknown."""
        if "example" in param:
            return self.render(param["example"])

        raw_schema = param.get("schema", param)
        if isinstance(raw_schema, dict) and "example" in raw_schema:
            return self.render(raw_schema["example"])

        node = parse_schema(raw_schema)
        if isinstance(node, UnknownSchema):
            return None
        return self.render(self.synthesize(node))

    def render(self, value: Any, pretty: bool = False) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        return self.codec.dumps(value, pretty=pretty)

    def _value(self, node: SchemaNode, guard: RefGuard) -> Any:
        if node.has_example:
            return node.example

        if isinstance(node, RefSchema):
            with guard.enter(node.ref):
                target = parse_schema(resolve_ref(node.ref, self.document))
                return self._value(target, guard)

        if node.enum:
            return node.enum[0]

        if isinstance(node, ObjectSchema):
            if not node.has_properties:
                return dict(FALLBACK_EXAMPLE)
            example = {}
            for name, prop in node.properties.items():
                value = self._property_value(name, prop)
                if value is not _SKIP:
                    example[name] = value
            return example

        if isinstance(node, ArraySchema):
            return list(EXAMPLE_ARRAY)

        if isinstance(node, PrimitiveSchema):
            return self._primitive(node, EXAMPLE_STRING)

        return dict(FALLBACK_EXAMPLE)

    def _property_value(self, name: str, prop: SchemaNode) -> Any:
        if prop.has_example:
            return prop.example

        # A referenced property is resolved only to learn its type, so a
        # self-reference such as Employee.manager -> Employee is not a cycle.
        if isinstance(prop, RefSchema):
            prop = parse_schema(deref({"$ref": prop.ref}, self.document))
            if prop.has_example:
                return prop.example

        if prop.enum:
            return prop.enum[0]
        if isinstance(prop, PrimitiveSchema):
            return self._primitive(prop, f"example_{name}")
        if isinstance(prop, ArraySchema):
            return list(EXAMPLE_ARRAY)
        if isinstance(prop, ObjectSchema):
            return dict(NESTED_OBJECT_PLACEHOLDER)
        return _SKIP

    @staticmethod
    def _primitive(node: PrimitiveSchema, placeholder: str) -> Any:
        if node.type in ("integer", "number"):
            return EXAMPLE_NUMBER
        if node.type == "boolean":
            return True
        if node.type == "string" and node.format in FORMAT_EXAMPLES:
            return FORMAT_EXAMPLES[node.format]
        return placeholder
