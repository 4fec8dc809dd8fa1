"""Core mapping, schema types and error handling for shape_schema."""

from .errors import (
    CoreError,
    ConfigError,
    ErrorCode,
    Severity,
    to_core_error,
)
from .mapper import TypeMapper, infer_annotation, load, load_type
from .mapper_exceptions import DepthLimitError, MapperError, TargetResolutionError
from .schema_ir import WILDCARD_KEY, Schema, SchemaItems, SchemaKind, to_minified_json
from .tags import FieldTag, Tag, parse_tag

__all__ = [
    # Mapping
    "TypeMapper",
    "infer_annotation",
    "load",
    "load_type",
    # Schema tree
    "Schema",
    "SchemaItems",
    "SchemaKind",
    "WILDCARD_KEY",
    "to_minified_json",
    # Field tags
    "FieldTag",
    "Tag",
    "parse_tag",
    # Error classes
    "CoreError",
    "ConfigError",
    "ErrorCode",
    "Severity",
    "MapperError",
    "DepthLimitError",
    "TargetResolutionError",
    "to_core_error",
]
