import json
import re
from pathlib import Path

import pytest

from openapi_analyzer.describe.examples import (
    EXAMPLE_ARRAY,
    FALLBACK_EXAMPLE,
    NESTED_OBJECT_PLACEHOLDER,
    ExampleSynthesizer,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def petstore():
    return json.loads((FIXTURES / "petstore.json").read_text())


@pytest.fixture
def synth(petstore):
    return ExampleSynthesizer(petstore)


class TestSynthesize:
    def test_primitives(self, synth):
        assert synth.synthesize({"type": "integer"}) == 42
        assert synth.synthesize({"type": "number"}) == 42
        assert synth.synthesize({"type": "boolean"}) is True
        assert synth.synthesize({"type": "string"}) == "example"

    def test_string_formats(self, synth):
        assert re.match(r"^\d{4}-\d{2}-\d{2}$", synth.synthesize({"type": "string", "format": "date"}))
        assert synth.synthesize({"type": "string", "format": "date-time"}) == "2023-01-01T12:00:00Z"
        assert synth.synthesize({"type": "string", "format": "uuid"}) == "123e4567-e89b-12d3-a456-426614174000"

    def test_explicit_example_wins(self, synth):
        assert synth.synthesize({"type": "integer", "example": 7}) == 7
        assert synth.synthesize({"type": "object", "example": {"a": 1}, "properties": {}}) == {"a": 1}

    def test_first_enum_value(self, synth):
        assert synth.synthesize({"type": "string", "enum": ["sold", "pending"]}) == "sold"

    def test_array(self, synth):
        assert synth.synthesize({"type": "array", "items": {"type": "integer"}}) == EXAMPLE_ARRAY

    def test_object_without_properties(self, synth):
        assert synth.synthesize({"type": "object"}) == FALLBACK_EXAMPLE

    def test_referenced_object_is_shallow(self, synth):
        value = synth.synthesize({"$ref": "#/components/schemas/NewPet"})
        assert value == {
            "name": "example_name",
            "tag": "example_tag",
            "vaccinated": True,
            "nicknames": ["item1", "item2"],
            "address": NESTED_OBJECT_PLACEHOLDER,
        }

    def test_referenced_properties_use_target_type(self, synth):
        value = synth.synthesize({"$ref": "#/components/schemas/Pet"})
        assert value["id"] == 42
        assert value["status"] == "available"
        assert value["birthday"] == "2023-01-01"
        assert value["owner"] == NESTED_OBJECT_PLACEHOLDER
        assert value["toys"] == EXAMPLE_ARRAY

    def test_recursive_schema_is_generated_one_level(self, synth):
        value = synth.synthesize({"$ref": "#/components/schemas/Node"})
        assert value == {"value": "example_value", "children": EXAMPLE_ARRAY}

    def test_self_referencing_property_gets_placeholder(self):
        document = {"components": {"schemas": {"Employee": {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "age": {"type": "integer"},
                "manager": {"$ref": "#/components/schemas/Employee"},
            },
        }}}}
        value = ExampleSynthesizer(document).synthesize({"$ref": "#/components/schemas/Employee"})
        assert value == {"name": "example_name", "age": 42, "manager": NESTED_OBJECT_PLACEHOLDER}

    def test_unresolvable_reference_falls_back(self, synth):
        assert synth.synthesize({"$ref": "#/components/schemas/Missing"}) == FALLBACK_EXAMPLE

    def test_results_are_fresh_copies(self, synth):
        first = synth.synthesize({"type": "array"})
        first.append("item3")
        assert synth.synthesize({"type": "array"}) == ["item1", "item2"]


class TestParameterExample:
    def test_parameter_example_wins(self, synth):
        assert synth.parameter_example({"name": "q", "example": 5, "schema": {"type": "integer"}}) == "5"

    def test_schema_example(self, synth):
        assert synth.parameter_example({"name": "q", "schema": {"type": "string", "example": "abc"}}) == "abc"

    def test_generated_from_schema(self, synth):
        assert synth.parameter_example({"name": "q", "schema": {"type": "integer"}}) == "42"
        assert synth.parameter_example({"name": "q", "schema": {"type": "boolean"}}) == "true"

    def test_swagger2_inline_type(self, synth):
        assert synth.parameter_example({"name": "q", "in": "query", "type": "integer"}) == "42"

    def test_array_is_rendered_as_json(self, synth):
        assert synth.parameter_example({"name": "q", "schema": {"type": "array"}}) == '["item1", "item2"]'

    def test_unknown_type_has_no_example(self, synth):
        assert synth.parameter_example({"name": "q", "in": "query"}) is None


class TestRender:
    def test_render(self, synth):
        assert synth.render("text") == "text"
        assert synth.render(False) == "false"
        assert synth.render(3) == "3"
        assert synth.render({"a": 1}) == '{"a": 1}'
