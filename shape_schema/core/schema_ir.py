"""Schema tree types for shape_schema.

A ``Schema`` is one node of the generated JSON Schema document. Nodes are
built once by the mapper and frozen afterwards.

Serialized form:
- ``type``: the node kind, omitted when the kind is unrepresentable
- ``items``: ``{"type": ...}`` for arrays only, ``{}`` when the element kind is unknown
- ``properties``: child schemas for objects only
- ``required``: required property names for objects, in declaration order

Every other key is omitted when empty.
"""

from __future__ import annotations
import json
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Property key standing for "any key" when describing a mapping's values.
WILDCARD_KEY = ".*"

DEFAULT_INDENT = 2


class SchemaKind(str, Enum):
    bool = "bool"
    integer = "integer"
    number = "number"
    string = "string"
    array = "array"
    object = "object"
    unrepresentable = ""


class SchemaItems(BaseModel):
    """Flat element description of an array: a kind and nothing else."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: SchemaKind = Field(SchemaKind.unrepresentable, alias="type")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value} if self.kind.value else {}


class Schema(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: SchemaKind = Field(SchemaKind.unrepresentable, alias="type")
    items: Optional[SchemaItems] = None
    properties: Optional[Dict[str, "Schema"]] = None
    required: Optional[List[str]] = None

    @model_validator(mode="after")
    def _validate_shape(self):
        if self.items is not None and self.kind != SchemaKind.array:
            raise ValueError("items is only allowed on array schemas")
        if self.kind != SchemaKind.object:
            if self.properties is not None or self.required is not None:
                raise ValueError("properties and required are only allowed on object schemas")
        if self.required:
            if len(set(self.required)) != len(self.required):
                raise ValueError(f"Duplicate names in required: {self.required}")
            missing = [name for name in self.required if name not in (self.properties or {})]
            if missing:
                raise ValueError(f"Required names missing from properties: {missing}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict form with every empty attribute left out."""
        data: Dict[str, Any] = {}
        if self.kind.value:
            data["type"] = self.kind.value
        if self.items is not None:
            data["items"] = self.items.to_dict()
        if self.properties:
            data["properties"] = {name: child.to_dict() for name, child in self.properties.items()}
        if self.required:
            data["required"] = list(self.required)
        return data

    def to_json(self, indent: Optional[int] = DEFAULT_INDENT, sort_keys: bool = False) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=sort_keys)

    def __str__(self) -> str:
        return self.to_json()


def to_minified_json(schema: Schema) -> str:
    return json.dumps(schema.to_dict(), separators=(",", ":"))


def leaf(kind: SchemaKind) -> Schema:
    """Schema for a kind with no children."""
    return Schema(kind=kind)


Schema.model_rebuild()
