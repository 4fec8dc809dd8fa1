"""
Tests for the type-shape to schema mapper.

Tests cover:
1. Primitive classification of runtime values
2. Byte blob collapse and flat array/map element kinds
3. Record handling: tag names, required inference, nested recursion
4. pydantic, NamedTuple and TypedDict records
5. Depth limit on self-referential records
"""

import json
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Dict, List, Optional, Tuple

import pytest

from shape_schema import WILDCARD_KEY, DepthLimitError, Schema, SchemaKind, Tag, TypeMapper, load, load_type
from shape_schema.core.mapper import infer_annotation
from shape_schema.settings import MapperSettings

from sample_models import Customer, Invoice, Node, Order, Point, Settings, Simple


class Color(Enum):
    red = "red"


class TestPrimitives:
    """Leaf kinds for recognized primitive values"""

    @pytest.mark.parametrize(
        "value,kind",
        [
            (True, SchemaKind.bool),
            (7, SchemaKind.integer),
            (-3, SchemaKind.integer),
            (1.5, SchemaKind.number),
            (Decimal("2.50"), SchemaKind.number),
            ("text", SchemaKind.string),
        ],
    )
    def test_primitive_kinds(self, value, kind):
        schema = load(value)
        assert schema.kind == kind
        assert schema.items is None
        assert schema.properties is None
        assert schema.required is None

    def test_bool_is_not_integer(self):
        assert load(False).to_dict() == {"type": "bool"}

    @pytest.mark.parametrize("value", [None, Color.red, len, object()])
    def test_unrepresentable_values_degrade_to_empty_kind(self, value):
        schema = load(value)
        assert schema.kind == SchemaKind.unrepresentable
        assert schema.to_dict() == {}


class TestSequences:
    """Sequence handling"""

    @pytest.mark.parametrize("value", [b"\x00\x01", bytearray(b"abc"), memoryview(b"xy")])
    def test_byte_sequences_are_strings(self, value):
        schema = load(value)
        assert schema.kind == SchemaKind.string
        assert schema.items is None

    def test_int_list(self):
        schema = load([1, 2, 3])
        assert schema.kind == SchemaKind.array
        assert schema.items.kind == SchemaKind.integer
        assert schema.to_dict() == {"type": "array", "items": {"type": "integer"}}

    def test_tuple_and_set_values(self):
        assert load((1.0, 2.0)).items.kind == SchemaKind.number
        assert load({"a", "b"}).items.kind == SchemaKind.string

    def test_empty_or_mixed_list_has_unknown_element(self):
        assert load([]).to_dict() == {"type": "array", "items": {}}
        assert load([1, "a"]).to_dict() == {"type": "array", "items": {}}
        assert load([]).items.kind == SchemaKind.unrepresentable

    def test_list_of_records_is_shallow(self):
        schema = load_type(List[Simple])
        assert schema.to_dict() == {"type": "array", "items": {"type": "object"}}

    def test_list_of_bytes_elements_are_arrays(self):
        assert load_type(List[bytes]).to_dict() == {"type": "array", "items": {"type": "array"}}

    @pytest.mark.parametrize(
        "annotation,item_kind",
        [
            (List[int], "integer"),
            (list[str], "string"),
            (Tuple[float, ...], "number"),
            (Tuple[int, int], "integer"),
            (Tuple[int, str], None),
            (List[Optional[bool]], "bool"),
        ],
    )
    def test_annotations(self, annotation, item_kind):
        expected = {"type": "array", "items": {"type": item_kind} if item_kind else {}}
        assert load_type(annotation).to_dict() == expected


class TestMappings:
    """Map handling"""

    def test_int_map(self):
        schema = load({"a": 1, "b": 2})
        assert schema.kind == SchemaKind.object
        assert list(schema.properties) == [WILDCARD_KEY]
        assert schema.properties[WILDCARD_KEY].kind == SchemaKind.integer
        assert schema.required is None

    def test_key_type_is_discarded(self):
        assert load_type(Dict[int, str]).to_dict() == load_type(Dict[str, str]).to_dict()

    def test_map_of_records_is_shallow(self):
        schema = load_type(Dict[str, Simple])
        assert schema.to_dict() == {"type": "object", "properties": {".*": {"type": "object"}}}

    def test_empty_map_value_is_unrepresentable(self):
        assert load({}).to_dict() == {"type": "object", "properties": {".*": {}}}


class TestRecords:
    """Record (dataclass, pydantic, NamedTuple, TypedDict) handling"""

    def test_round_trip_simple(self):
        schema = load(Simple())
        assert json.loads(schema.to_json()) == {
            "type": "object",
            "properties": {"A": {"type": "string"}, "b": {"type": "integer"}},
            "required": ["A"],
        }

    def test_record_class_and_instance_match(self):
        assert load(Simple).to_json() == load(Simple(A="x", B=2)).to_json()

    def test_omitempty_field_not_required(self):
        schema = load(Simple())
        assert set(schema.properties) == {"A", "b"}
        assert schema.required == ["A"]

    def test_nested_record_is_recursive(self):
        schema = load(Customer())
        address = schema.properties["address"]
        assert address.kind == SchemaKind.object
        assert address.to_dict() == {
            "type": "object",
            "properties": {"street": {"type": "string"}, "zip": {"type": "string"}},
            "required": ["street"],
        }

    def test_customer_document(self):
        data = load(Customer()).to_dict()
        assert data["properties"]["tags"] == {"type": "array", "items": {"type": "string"}}
        assert data["properties"]["scores"] == {"type": "object", "properties": {".*": {"type": "number"}}}
        assert data["properties"]["avatar"] == {"type": "string"}
        # Optional does not affect required; only the tag does
        assert data["properties"]["nickname"] == {"type": "string"}
        assert data["required"] == ["name", "address", "tags", "scores", "avatar"]

    def test_collections_inside_record_stay_shallow(self):
        data = load(Order()).to_dict()
        assert data["properties"]["lines"] == {"type": "array", "items": {"type": "object"}}
        assert data["properties"]["totals"] == {"type": "object", "properties": {".*": {"type": "object"}}}
        assert data["properties"]["notes"] == {}
        assert data["properties"]["customer"]["properties"]["address"]["required"] == ["street"]
        assert data["required"] == ["id", "customer", "lines", "totals", "notes"]

    def test_pydantic_model(self):
        data = load(Invoice(number="INV-1")).to_dict()
        assert data["properties"] == {
            "number": {"type": "string"},
            "total": {"type": "number"},
            "is_paid": {"type": "bool"},
            "currencyCode": {"type": "string"},
        }
        assert data["required"] == ["number", "is_paid", "currencyCode"]

    def test_named_tuple(self):
        data = load(Point(1.0, 2.0)).to_dict()
        assert data == {
            "type": "object",
            "properties": {"x": {"type": "number"}, "y": {"type": "number"}},
            "required": ["x"],
        }

    def test_typed_dict(self):
        data = load(Settings).to_dict()
        assert data["properties"]["hosts"] == {"type": "array", "items": {"type": "string"}}
        assert data["required"] == ["retries", "hosts"]

    def test_required_order_follows_declaration(self):
        assert load(Order).required == ["id", "customer", "lines", "totals", "notes"]

    def test_idempotent(self):
        first = load(Order())
        second = load(Order())
        assert first.to_json() == second.to_json()
        assert first is not second

    def test_custom_tag_key_and_option(self):
        from dataclasses import dataclass, field

        @dataclass
        class Custom:
            a: int = field(default=0, metadata={"schema": "alpha,optional"})
            b: int = field(default=0, metadata={"json": "beta,omitempty"})

        settings = MapperSettings(tag_key="schema", omit_option="optional")
        schema = load(Custom(), settings=settings)
        assert set(schema.properties) == {"alpha", "b"}
        assert schema.required == ["b"]

    def test_annotated_tag_inside_optional(self):
        from dataclasses import dataclass

        @dataclass
        class Sparse:
            a: Optional[Annotated[int, Tag("alpha,omitempty")]] = None

        schema = load(Sparse())
        assert schema.to_dict() == {"type": "object", "properties": {"alpha": {"type": "integer"}}}
        assert schema.required is None


class TestDepthLimit:
    """Recursion guard for self-referential records"""

    def test_self_referential_record_raises(self):
        with pytest.raises(DepthLimitError, match="exceeds limit of 32") as exc_info:
            load(Node())
        assert exc_info.value.max_depth == 32
        assert exc_info.value.path[:2] == ("parent", "parent")

    def test_custom_depth(self):
        with pytest.raises(DepthLimitError):
            load(Customer(), max_depth=2)
        assert load(Customer(), max_depth=3).kind == SchemaKind.object

    def test_zero_depth_is_not_replaced_by_default(self):
        with pytest.raises(DepthLimitError, match="exceeds limit of 0"):
            load(1, max_depth=0)
        with pytest.raises(DepthLimitError):
            load_type(int, max_depth=0, settings=MapperSettings(max_depth=8))

    def test_mapper_is_reusable_after_error(self):
        mapper = TypeMapper(max_depth=5)
        with pytest.raises(DepthLimitError):
            mapper.load(Node())
        assert mapper.load(Simple()).required == ["A"]


class TestInferAnnotation:
    def test_containers(self):
        assert infer_annotation([1, 2]) == List[int]
        assert infer_annotation({"a": 1.0}) == Dict[Any, float]
        assert infer_annotation((1, 2)) == Tuple[int, ...]

    def test_records_and_scalars(self):
        assert infer_annotation(Simple()) is Simple
        assert infer_annotation(Simple) is Simple
        assert infer_annotation("x") is str
        assert infer_annotation(b"x") is bytes


def test_schema_is_frozen():
    schema = load(Simple())
    with pytest.raises(Exception):
        schema.kind = SchemaKind.string
    assert isinstance(schema, Schema)
