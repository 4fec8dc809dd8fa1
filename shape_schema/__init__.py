"""Derive JSON Schema documents from the type shape of Python values."""

from .core import (
    DepthLimitError,
    Schema,
    SchemaKind,
    Tag,
    TypeMapper,
    WILDCARD_KEY,
    load,
    load_type,
    parse_tag,
)

__version__ = "0.1.0"

__all__ = [
    "DepthLimitError",
    "Schema",
    "SchemaKind",
    "Tag",
    "TypeMapper",
    "WILDCARD_KEY",
    "load",
    "load_type",
    "parse_tag",
    "__version__",
]
