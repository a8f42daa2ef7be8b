import json
from pathlib import Path

import pytest

from openapi_analyzer.describe.examples import ExampleSynthesizer
from openapi_analyzer.errors import MethodNotSupportedError, ParseError
from openapi_analyzer.parser.base import SpecificationDocument
from openapi_analyzer.parser.swagger import extract_operation, iter_operations, load_spec_file

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def petstore():
    raw = json.loads((FIXTURES / "petstore.json").read_text())
    return SpecificationDocument(source="petstore.json", raw=raw)


@pytest.fixture
def swagger2():
    return load_spec_file(FIXTURES / "petstore.yaml")


def _extract(document, template, method):
    return extract_operation(document, template, method, ExampleSynthesizer(document.raw))


class TestLoadSpecFile:
    def test_load_yaml(self, swagger2):
        assert swagger2.info["title"] == "Petstore (Swagger 2)"
        assert swagger2.source.endswith("petstore.yaml")

    def test_load_json(self):
        doc = load_spec_file(FIXTURES / "petstore.json")
        assert doc.info["version"] == "1.0.0"

    def test_invalid_yaml(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("paths: [unclosed")
        with pytest.raises(ParseError):
            load_spec_file(f)

    def test_not_a_mapping(self, tmp_path):
        f = tmp_path / "list.yaml"
        f.write_text("- a\n- b\n")
        with pytest.raises(ParseError):
            load_spec_file(f)


class TestIterOperations:
    def test_declared_order(self, petstore):
        ops = [(path, method) for path, method, _ in iter_operations(petstore)]
        assert ops == [
            ("/pets", "GET"),
            ("/pets", "POST"),
            ("/pets/{petId}", "GET"),
            ("/pets/{petId}", "PUT"),
            ("/pets/{petId}", "DELETE"),
            ("/pets/{petId}/toys", "GET"),
            ("/trees", "POST"),
        ]


class TestExtractOperation:
    def test_query_parameters(self, petstore):
        op = _extract(petstore, "/pets", "get")
        assert op.method == "GET"
        assert op.summary == "List all pets"
        limit, status = op.parameters
        assert limit.name == "limit"
        assert limit.location == "query"
        assert limit.required is False
        assert limit.param_type == "integer (int32)"
        assert limit.example == "42"
        assert status.example == "available"

    def test_path_item_parameters_are_inherited(self, petstore):
        op = _extract(petstore, "/pets/{petId}", "GET")
        assert [p.name for p in op.parameters] == ["petId"]
        assert op.parameters[0].required is True

    def test_operation_parameter_overrides_path_item(self):
        raw = {
            "paths": {
                "/a/{id}": {
                    "parameters": [{"name": "id", "in": "path", "required": True, "schema": {"type": "string"}}],
                    "get": {"parameters": [{"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}}]},
                }
            }
        }
        op = _extract(SpecificationDocument(source="x", raw=raw), "/a/{id}", "GET")
        assert len(op.parameters) == 1
        assert op.parameters[0].param_type == "integer"

    def test_referenced_parameter(self, petstore):
        op = _extract(petstore, "/pets/{petId}", "DELETE")
        header = op.parameters_in("header")[0]
        assert header.name == "X-Request-ID"
        assert header.param_type == "string (uuid)"
        assert header.example == "123e4567-e89b-12d3-a456-426614174000"

    def test_request_body(self, petstore):
        op = _extract(petstore, "/pets", "POST")
        body = op.request_body
        assert body.required is True
        assert body.description == "Pet to add to the store"
        media = body.content[0]
        assert media.content_type == "application/json"
        assert media.schema_node == {"$ref": "#/components/schemas/NewPet"}
        assert media.has_example is False

    def test_referenced_request_body_with_example(self, petstore):
        op = _extract(petstore, "/pets/{petId}", "PUT")
        media = op.request_body.content[0]
        assert media.has_example
        assert media.example == {"id": 7, "name": "Rex"}

    def test_media_examples_entry(self):
        raw = {
            "paths": {
                "/a": {
                    "post": {
                        "requestBody": {
                            "content": {
                                "application/json": {
                                    "schema": {"type": "object"},
                                    "examples": {"first": {"value": {"k": 1}}, "second": {"value": {"k": 2}}},
                                }
                            }
                        }
                    }
                }
            }
        }
        op = _extract(SpecificationDocument(source="x", raw=raw), "/a", "POST")
        assert op.request_body.content[0].example == {"k": 1}

    def test_swagger2_body_parameter(self, swagger2):
        op = _extract(swagger2, "/pets", "POST")
        assert op.parameters == []
        assert op.request_body.required is True
        assert op.request_body.description == "Pet to add"
        assert op.request_body.content[0].schema_node == {"$ref": "#/definitions/Pet"}

    def test_swagger2_inline_parameter_type(self, swagger2):
        op = _extract(swagger2, "/pets", "GET")
        assert op.parameters[0].param_type == "integer (int32)"
        assert op.parameters[0].example == "42"

    def test_method_not_supported(self, petstore):
        with pytest.raises(MethodNotSupportedError) as exc:
            _extract(petstore, "/pets", "PATCH")
        assert str(exc.value) == "HTTP method 'PATCH' not supported for path '/pets'."
