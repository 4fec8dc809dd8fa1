"""Type-shape to JSON Schema mapping.

``load(value)`` walks the type structure of a value and returns a ``Schema``
tree. Dispatch happens on the structural kind:

- primitives become leaf schemas
- byte blobs collapse to ``string``
- sequences become ``array`` with a flat ``items`` kind
- mappings become ``object`` with a single wildcard property for the values
- records become ``object`` with one property per declared field, recursing
  into each field

Only record fields are described recursively. Array elements and mapping
values are classified flat, so a list of records yields
``{"type": "array", "items": {"type": "object"}}``.

Unrepresentable kinds never raise; they produce a schema with an empty kind.
The only failure is nesting deeper than ``max_depth``, which is how cyclic
record types surface.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple

from . import kinds
from .mapper_exceptions import DepthLimitError
from .records import iter_fields
from .schema_ir import WILDCARD_KEY, Schema, SchemaItems, SchemaKind, leaf
from .tags import DEFAULT_TAG_KEY, OMIT_EMPTY, parse_tag

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 32


class TypeMapper:
    """Builds Schema trees from annotations with a nesting depth limit.

    A mapper holds only per-call traversal state; use a fresh instance (or the
    module-level ``load``/``load_type`` helpers) for each document.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        tag_key: str = DEFAULT_TAG_KEY,
        omit_option: str = OMIT_EMPTY,
    ):
        self.max_depth = max_depth
        self.tag_key = tag_key
        self.omit_option = omit_option
        self.current_depth = 0
        self._path: List[str] = []

    def load(self, value: Any) -> Schema:
        """Schema for a runtime value. Record classes are accepted as-is."""
        return self.load_type(infer_annotation(value))

    def load_type(self, annotation: Any) -> Schema:
        self.current_depth = 0
        self._path = []
        return self.visit(annotation)

    def visit(self, annotation: Any) -> Schema:
        self.current_depth += 1
        if self.current_depth > self.max_depth:
            raise DepthLimitError(
                f"Type nesting exceeds limit of {self.max_depth} at {'.'.join(self._path) or '<root>'}",
                max_depth=self.max_depth,
                path=tuple(self._path),
            )

        try:
            annotation = kinds.unwrap(annotation)
            kind = kinds.kind_of(annotation)

            if kind == SchemaKind.unrepresentable:
                logger.debug("Unrepresentable annotation %r", annotation)
                return leaf(kind)
            if kinds.is_record(annotation):
                return self._visit_record(annotation)
            if kinds.is_byte_blob(annotation):
                return leaf(SchemaKind.string)
            if kind == SchemaKind.array:
                return self._visit_sequence(annotation)
            if kind == SchemaKind.object:
                return self._visit_mapping(annotation)
            return leaf(kind)
        finally:
            self.current_depth -= 1

    def _visit_sequence(self, annotation: Any) -> Schema:
        element = kinds.element_type(annotation)
        return Schema(kind=SchemaKind.array, items=SchemaItems(kind=kinds.kind_of(element)))

    def _visit_mapping(self, annotation: Any) -> Schema:
        value = kinds.value_type(annotation)
        return Schema(kind=SchemaKind.object, properties={WILDCARD_KEY: leaf(kinds.kind_of(value))})

    def _visit_record(self, record: type) -> Schema:
        properties: Dict[str, Schema] = {}
        required: List[str] = []

        for field in iter_fields(record, self.tag_key):
            tag = parse_tag(field.raw_tag, self.omit_option)
            name = tag.resolve_name(field.name)
            if name in properties:
                logger.debug("Property %r of %s declared more than once", name, record.__name__)

            self._path.append(name)
            try:
                properties[name] = self.visit(field.annotation)
            finally:
                self._path.pop()

            if tag.required and name not in required:
                required.append(name)

        return Schema(kind=SchemaKind.object, properties=properties, required=required or None)


def _common_type(values: Any) -> Any:
    types = {type(v) for v in values}
    if len(types) != 1:
        return Any
    return types.pop()


def infer_annotation(value: Any) -> Any:
    """Best annotation for a runtime value.

    Containers carry no element type at runtime, so it is taken from their
    contents: the common type of the elements (or of a dict's values), or
    ``Any`` when they are empty or mixed.
    """
    if isinstance(value, type) and kinds.is_record(value):
        return value
    if kinds.is_record(type(value)) or isinstance(value, (str, bytes, bytearray, memoryview)):
        return type(value)
    if isinstance(value, dict):
        return Dict[Any, _common_type(value.values())]
    if isinstance(value, (list, tuple, set, frozenset)):
        return Tuple[_common_type(value), ...] if isinstance(value, tuple) else List[_common_type(value)]
    return type(value)


def load(value: Any, *, max_depth: Optional[int] = None, settings: Any = None) -> Schema:
    """Build the Schema tree for ``value``.

    Args:
        value: Instance (or record class) to describe
        max_depth: Override of the nesting depth limit
        settings: Optional MapperSettings supplying depth and tag options

    Raises:
        DepthLimitError: If the type nesting exceeds the depth limit
    """
    return _mapper(max_depth, settings).load(value)


def load_type(annotation: Any, *, max_depth: Optional[int] = None, settings: Any = None) -> Schema:
    """Build the Schema tree for a type annotation such as ``list[int]``."""
    return _mapper(max_depth, settings).load_type(annotation)


def _mapper(max_depth: Optional[int], settings: Any) -> TypeMapper:
    if settings is None:
        return TypeMapper(max_depth=max_depth if max_depth is not None else DEFAULT_MAX_DEPTH)
    return TypeMapper(
        max_depth=max_depth if max_depth is not None else settings.max_depth,
        tag_key=settings.tag_key,
        omit_option=settings.omit_option,
    )
