"""Kind classification for Python type annotations.

Every annotation the mapper sees is reduced to one of a closed set of structural
shapes before any schema is built:

- primitives (bool, integer, number, string)
- byte blobs (bytes, bytearray, memoryview)
- sequences (list, tuple, set and their abstract counterparts)
- mappings (dict and Mapping)
- records (dataclasses, pydantic models, TypedDict, NamedTuple)

Anything else is unrepresentable and maps to the empty kind.
"""

from __future__ import annotations
import collections.abc
import dataclasses
import types
import typing
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Optional, Tuple

from pydantic import BaseModel

from .schema_ir import SchemaKind

BYTE_TYPES: Tuple[type, ...] = (bytes, bytearray, memoryview)

SEQUENCE_ORIGINS: Tuple[Any, ...] = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)

MAPPING_ORIGINS: Tuple[Any, ...] = (
    dict,
    collections.OrderedDict,
    collections.defaultdict,
    collections.abc.Mapping,
    collections.abc.MutableMapping,
)

# Qualifiers that do not change the shape of the wrapped annotation.
TRANSPARENT_WRAPPERS: Tuple[Any, ...] = (typing.Annotated, typing.Required, typing.NotRequired)

# Order matters: bool before int, str before the sequence check.
PRIMITIVE_KINDS: Tuple[Tuple[type, SchemaKind], ...] = (
    (bool, SchemaKind.bool),
    (int, SchemaKind.integer),
    (float, SchemaKind.number),
    (Decimal, SchemaKind.number),
    (Fraction, SchemaKind.number),
    (str, SchemaKind.string),
)


def unwrap_once(annotation: Any) -> Optional[Any]:
    """Peel one Annotated, Required, NewType or Optional layer; None when there is none."""
    if typing.get_origin(annotation) in TRANSPARENT_WRAPPERS:
        return typing.get_args(annotation)[0]
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return supertype
    return _optional_inner(annotation)


def unwrap(annotation: Any) -> Any:
    """Strip Annotated, Required, NewType and Optional wrappers from an annotation."""
    inner = unwrap_once(annotation)
    while inner is not None:
        annotation = inner
        inner = unwrap_once(annotation)
    return annotation


def _optional_inner(annotation: Any) -> Optional[Any]:
    if not _is_union(annotation):
        return None
    members = [a for a in typing.get_args(annotation) if a is not type(None)]
    if len(members) == 1 and len(typing.get_args(annotation)) == 2:
        return members[0]
    return None


def _is_union(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    if origin is typing.Union:
        return True
    return origin is types.UnionType


def is_record(annotation: Any) -> bool:
    """True for dataclasses, pydantic models, TypedDicts and NamedTuples."""
    if not isinstance(annotation, type):
        return False
    if dataclasses.is_dataclass(annotation):
        return True
    if issubclass(annotation, BaseModel):
        return True
    if typing.is_typeddict(annotation):
        return True
    return issubclass(annotation, tuple) and hasattr(annotation, "_fields")


def is_byte_blob(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BYTE_TYPES)


def sequence_origin(annotation: Any) -> Optional[Any]:
    """Return the container origin when the annotation is a sequence, else None."""
    origin = typing.get_origin(annotation) or annotation
    if not isinstance(origin, type):
        return None
    if issubclass(origin, (str,) + BYTE_TYPES):
        return None
    if issubclass(origin, collections.abc.Mapping):
        return None
    if origin in SEQUENCE_ORIGINS or issubclass(origin, (list, tuple, set, frozenset)):
        return origin
    return None


def mapping_origin(annotation: Any) -> Optional[Any]:
    origin = typing.get_origin(annotation) or annotation
    if not isinstance(origin, type):
        return None
    if origin in MAPPING_ORIGINS or issubclass(origin, dict):
        return origin
    return None


def element_type(annotation: Any) -> Any:
    """Element annotation of a sequence, or Any when it cannot be determined."""
    args = typing.get_args(annotation)
    if not args:
        return Any
    origin = typing.get_origin(annotation)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        if args == ((),):
            return Any
        return args[0] if all(a == args[0] for a in args) else Any
    return args[0]


def value_type(annotation: Any) -> Any:
    """Value annotation of a mapping; the key type is discarded."""
    args = typing.get_args(annotation)
    if len(args) == 2:
        return args[1]
    return Any


def kind_of(annotation: Any) -> SchemaKind:
    """Flat classification of an annotation into a SchemaKind.

    This never recurses: records are ``object`` and byte blobs are ``array``
    here. The byte blob to ``string`` collapse only applies when a whole
    value is classified by the mapper.
    """
    annotation = unwrap(annotation)

    if is_record(annotation):
        return SchemaKind.object

    if isinstance(annotation, type):
        if issubclass(annotation, Enum):
            return SchemaKind.unrepresentable
        for py_type, kind in PRIMITIVE_KINDS:
            if issubclass(annotation, py_type):
                return kind
        if is_byte_blob(annotation):
            return SchemaKind.array

    if mapping_origin(annotation) is not None:
        return SchemaKind.object
    if sequence_origin(annotation) is not None:
        return SchemaKind.array
    return SchemaKind.unrepresentable


def describe_table() -> Tuple[Tuple[str, str], ...]:
    """Human-readable classification table, used by the CLI."""
    return (
        ("bool", SchemaKind.bool.value),
        ("int", SchemaKind.integer.value),
        ("float, Decimal, Fraction", SchemaKind.number.value),
        ("str", SchemaKind.string.value),
        ("bytes, bytearray, memoryview (whole value)", SchemaKind.string.value),
        ("list, tuple, set, frozenset, Sequence, Set", SchemaKind.array.value),
        ("dict, Mapping", SchemaKind.object.value),
        ("dataclass, BaseModel, TypedDict, NamedTuple", SchemaKind.object.value),
        ("anything else", "(empty)"),
    )
