"""Endpoint describer: renders an operation and its schemas as markdown text."""

from typing import Any

from openapi_analyzer.codec import JsonCodec
from openapi_analyzer.describe.examples import ExampleSynthesizer
from openapi_analyzer.parser.base import (
    MediaTypeDescriptor,
    OperationDescriptor,
    ParameterDescriptor,
    SpecificationDocument,
)
from openapi_analyzer.parser.refs import RefGuard, resolve_ref
from openapi_analyzer.parser.schema import (
    ArraySchema,
    ObjectSchema,
    PrimitiveSchema,
    RefSchema,
    SchemaNode,
    parse_schema,
    type_label,
)
from openapi_analyzer.parser.swagger import iter_operations

PARAMETER_LOCATIONS = ("path", "query", "header")


def describe_specification(document: SpecificationDocument, base_url: str) -> str:
    """Summary of a whole document: info block plus every path and method."""
    lines = [f"# API Specification for {base_url}", ""]

    info = document.info
    if isinstance(info.get("title"), str):
        lines += [f"## {info['title']}", ""]
    if isinstance(info.get("description"), str):
        lines += [info["description"], ""]
    if "version" in info:
        lines += [f"API Version: {info['version']}", ""]

    if document.has_paths:
        lines += ["## Available Endpoints", ""]
        current_path = None
        for path, method, operation in iter_operations(document):
            if path != current_path:
                lines += [f"### {path}", ""]
                current_path = path
            lines += [f"#### {method}", ""]
            for key in ("summary", "description"):
                if isinstance(operation.get(key), str):
                    lines += [operation[key], ""]
            lines += [
                "*For detailed parameter and response information, "
                "use the analyzeEndpoint function with this path.*",
                "",
            ]

    return "\n".join(lines) + "\n"


class EndpointDescriber:
    """Renders one operation against the document it came from.

    Each top-level ``describe_schema`` call tracks the references it is
    expanding; re-entering one raises CyclicReferenceError.
    """

    def __init__(
        self,
        document: SpecificationDocument,
        synthesizer: ExampleSynthesizer,
        codec: JsonCodec | None = None,
    ):
        self.document = document
        self.synthesizer = synthesizer
        self.codec = codec or JsonCodec()

    def describe(self, operation: OperationDescriptor) -> str:
        """Overview, parameters grouped by location, then the request body."""
        parts = [f"# Endpoint Analysis: {operation.method} {operation.path}\n\n"]

        if operation.summary or operation.description:
            parts.append("## Overview\n\n")
            if operation.summary:
                parts.append(f"{operation.summary}\n\n")
            if operation.description:
                parts.append(f"{operation.description}\n\n")

        if operation.parameters:
            parts.append(self._describe_parameters(operation))

        if operation.request_body is not None:
            parts.append(self._describe_request_body(operation))

        return "".join(parts)

    def describe_call(self, domain_url: str, path: str, operation: OperationDescriptor) -> str:
        """A ready-to-edit ``analyzeAndCall`` invocation for this operation."""
        query = {
            p.name: p.example if p.example is not None else "value"
            for p in operation.parameters_in("query")
        }

        body = None
        content_type = "application/json"
        if operation.request_body is not None and operation.request_body.content:
            media = operation.request_body.content[0]
            content_type = media.content_type
            body = self._media_example(media)

        headers = {"Content-Type": content_type}
        for p in operation.parameters_in("header"):
            if p.required:
                headers[p.name] = p.example if p.example is not None else "value"

        args = [
            self.codec.dumps(domain_url, pretty=False),
            self.codec.dumps(path, pretty=False),
            self.codec.dumps(operation.method, pretty=False),
            self.codec.dumps(query, pretty=False) if query else "null",
            self.codec.dumps(body, pretty=False) if body is not None else "null",
            self.codec.dumps(headers, pretty=False),
        ]
        return (
            "## How to Call This Endpoint\n\n"
            "You can use the `analyzeAndCall` function to make a request to this endpoint:\n\n"
            "```\nanalyzeAndCall(\n  " + ",\n  ".join(args) + "\n)\n```\n\n"
        )

    def describe_schema(self, schema: SchemaNode | dict[str, Any], indent: int = 0) -> str:
        node = schema if not isinstance(schema, dict) else parse_schema(schema)
        return self._schema_info(node, indent, RefGuard())

    # -- parameters -----------------------------------------------------------

    def _describe_parameters(self, operation: OperationDescriptor) -> str:
        parts = ["## Required Parameters\n\n"]

        locations = list(PARAMETER_LOCATIONS)
        for p in operation.parameters:
            if p.location not in locations:
                locations.append(p.location)

        for location in locations:
            params = operation.parameters_in(location)
            if not params:
                continue
            parts.append(f"### {location.title()} Parameters\n\n")
            for p in params:
                parts.append(self._parameter_info(p))
            parts.append("\n")

        return "".join(parts)

    def _parameter_info(self, p: ParameterDescriptor) -> str:
        flag = "**Required**" if p.required else "Optional"
        text = f"- **{p.name}** ({p.param_type}, {flag})\n"
        if p.description:
            text += f"  - {p.description}\n"
        if p.example is not None:
            text += f"  - Example: `{p.example}`\n"
        return text

    # -- request body ---------------------------------------------------------

    def _describe_request_body(self, operation: OperationDescriptor) -> str:
        body = operation.request_body
        parts = ["## Request Body\n\n", f"Required: {'Yes' if body.required else 'No'}\n\n"]
        if body.description:
            parts.append(f"{body.description}\n\n")

        for media in body.content:
            parts.append(f"### Content Type: {media.content_type}\n\n")
            if media.schema_node is not None:
                parts.append(self.describe_schema(media.schema_node))

            if media.has_example:
                parts.append("#### Example:\n\n```json\n")
                parts.append(self.codec.dumps(media.example))
                parts.append("\n```\n\n")
            elif media.schema_node is not None:
                parts.append("#### Example (Generated):\n\n```json\n")
                parts.append(self.codec.dumps(self.synthesizer.synthesize(media.schema_node)))
                parts.append("\n```\n\n")

        return "".join(parts)

    def _media_example(self, media: MediaTypeDescriptor) -> Any:
        if media.has_example:
            return media.example
        if media.schema_node is not None:
            return self.synthesizer.synthesize(media.schema_node)
        return None

    # -- schema breakdown -----------------------------------------------------

    def _schema_info(self, node: SchemaNode, level: int, guard: RefGuard) -> str:
        indent = "  " * level

        if isinstance(node, RefSchema):
            text = f"{indent}Schema: {node.name}\n\n"
            with guard.enter(node.ref):
                target = parse_schema(resolve_ref(node.ref, self.document.raw))
                return text + self._schema_info(target, level, guard)

        if isinstance(node, ObjectSchema):
            if not node.has_properties:
                return f"{indent}Type: object (no properties defined)\n\n"
            text = f"{indent}Type: object\n\n{indent}Properties:\n\n"
            for name, prop in node.properties.items():
                text += self._property_info(name, prop, node, level, guard)
            return text

        if isinstance(node, ArraySchema):
            text = f"{indent}Type: array\n\n"
            if node.items is not None:
                text += f"{indent}Items:\n\n" + self._schema_info(node.items, level + 1, guard)
            return text

        if isinstance(node, PrimitiveSchema):
            text = f"{indent}Type: {type_label(node)}\n\n"
            if node.enum:
                text += f"{indent}Enum values: {self._enum_values(node)}\n\n"
            return text

        return f"{indent}Schema: unknown\n\n"

    def _property_info(
        self,
        name: str,
        prop: SchemaNode,
        parent: ObjectSchema,
        level: int,
        guard: RefGuard,
    ) -> str:
        indent = "  " * level
        required = "Yes" if parent.is_required(name) else "No"
        text = f"{indent}- **{name}** ({type_label(prop)}, Required: {required})\n"

        if prop.description:
            text += f"{indent}  - Description: {prop.description}\n"
        if prop.enum:
            text += f"{indent}  - Enum values: {self._enum_values(prop)}\n"

        if isinstance(prop, ObjectSchema) and prop.has_properties:
            text += "\n" + self._schema_info(prop, level + 1, guard)
        elif isinstance(prop, ArraySchema) and isinstance(prop.items, (RefSchema, ObjectSchema)):
            text += f"\n{indent}  - Items:\n\n" + self._schema_info(prop.items, level + 2, guard)

        return text

    def _enum_values(self, node: SchemaNode) -> str:
        return ", ".join(self.synthesizer.render(v) for v in node.enum)
