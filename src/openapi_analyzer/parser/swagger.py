"""OpenAPI / Swagger document reading.

Loads local documents and extracts one operation from a parsed document into
an OperationDescriptor. Handles OpenAPI 3.x request bodies and Swagger 2.0
``in: body`` parameters.
"""

from pathlib import Path
from typing import Any, Iterator

import yaml

from openapi_analyzer.describe.examples import ExampleSynthesizer
from openapi_analyzer.errors import MethodNotSupportedError, ParseError
from openapi_analyzer.parser.base import (
    HTTP_METHODS,
    MediaTypeDescriptor,
    OperationDescriptor,
    ParameterDescriptor,
    RequestBodyDescriptor,
    SpecificationDocument,
)
from openapi_analyzer.parser.refs import deref
from openapi_analyzer.parser.schema import parse_schema, type_label


def load_spec_file(file_path: Path) -> SpecificationDocument:
    """Load an OpenAPI/Swagger file (YAML or JSON) from disk."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse {file_path}: {e}") from e

    if not isinstance(doc, dict):
        raise ParseError(f"{file_path} does not contain an OpenAPI document.")
    return SpecificationDocument(source=str(file_path), raw=doc)


def iter_operations(document: SpecificationDocument) -> Iterator[tuple[str, str, dict[str, Any]]]:
    """Yield (path, METHOD, operation) in declared order, skipping non-method keys."""
    for path, path_item in document.paths.items():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method.lower() in HTTP_METHODS and isinstance(operation, dict):
                yield path, method.upper(), operation


def extract_operation(
    document: SpecificationDocument,
    template: str,
    method: str,
    synthesizer: ExampleSynthesizer,
) -> OperationDescriptor:
    """Build the OperationDescriptor for ``method`` on a matched path template."""
    raw = document.raw
    path_item = deref(document.paths.get(template), raw)
    operation = path_item.get(method.lower()) if isinstance(path_item, dict) else None
    if not isinstance(operation, dict):
        raise MethodNotSupportedError(method.upper(), template)

    raw_params = _merge_parameters(
        path_item.get("parameters") or [],
        operation.get("parameters") or [],
        raw,
    )

    body_params = [p for p in raw_params if p.get("in") == "body"]
    params = [_parse_parameter(p, synthesizer) for p in raw_params if p.get("in") != "body"]

    request_body = _parse_request_body(deref(operation.get("requestBody"), raw), raw)
    if request_body is None and body_params:
        request_body = _body_from_parameter(body_params[0])

    return OperationDescriptor(
        method=method.upper(),
        path=template,
        summary=_text(operation.get("summary")),
        description=_text(operation.get("description")),
        parameters=params,
        request_body=request_body,
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _merge_parameters(shared: list, own: list, raw: dict) -> list[dict]:
    """Path-item parameters first; an operation parameter with the same (name, in) replaces one."""
    merged: dict[tuple[str, str], dict] = {}
    for p in [*shared, *own]:
        p = deref(p, raw)
        if not isinstance(p, dict):
            continue
        key = (str(p.get("name", "")), str(p.get("in", "query")))
        merged[key] = p
    return list(merged.values())


def _parse_parameter(p: dict, synthesizer: ExampleSynthesizer) -> ParameterDescriptor:
    schema = p.get("schema")
    # Swagger 2.0 puts type/format/items on the parameter itself.
    node = parse_schema(schema if isinstance(schema, dict) else p)

    return ParameterDescriptor(
        name=str(p.get("name", "unknown")),
        location=str(p.get("in", "query")),
        required=p.get("required") is True,
        param_type=type_label(node),
        description=_text(p.get("description")),
        example=synthesizer.parameter_example(p),
    )


def _parse_request_body(body: Any, raw: dict) -> RequestBodyDescriptor | None:
    if not isinstance(body, dict):
        return None

    content = body.get("content")
    media_types = []
    if isinstance(content, dict):
        for content_type, media in content.items():
            if isinstance(media, dict):
                media_types.append(_parse_media_type(content_type, media, raw))

    return RequestBodyDescriptor(
        required=body.get("required") is True,
        description=_text(body.get("description")),
        content=media_types,
    )


def _parse_media_type(content_type: str, media: dict, raw: dict) -> MediaTypeDescriptor:
    schema = media.get("schema")
    schema = schema if isinstance(schema, dict) else None

    if "example" in media:
        return MediaTypeDescriptor(
            content_type=content_type, schema_node=schema, example=media["example"], has_example=True
        )

    examples = media.get("examples")
    if isinstance(examples, dict):
        for entry in examples.values():
            entry = deref(entry, raw)
            if isinstance(entry, dict) and "value" in entry:
                return MediaTypeDescriptor(
                    content_type=content_type, schema_node=schema, example=entry["value"], has_example=True
                )
            break

    return MediaTypeDescriptor(content_type=content_type, schema_node=schema)


def _body_from_parameter(p: dict) -> RequestBodyDescriptor:
    schema = p.get("schema")
    return RequestBodyDescriptor(
        required=p.get("required") is True,
        description=_text(p.get("description")),
        content=[
            MediaTypeDescriptor(
                content_type="application/json",
                schema_node=schema if isinstance(schema, dict) else None,
            )
        ],
    )
