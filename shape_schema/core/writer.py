from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import CoreError, ErrorCode
from .schema_ir import DEFAULT_INDENT, Schema

DRAFT_URI = "https://json-schema.org/draft/2020-12/schema"


def schema_document(
    schema: Schema, title: Optional[str] = None, description: Optional[str] = None
) -> Dict[str, Any]:
    """Schema dict with optional document metadata (``$schema``, title, description)."""
    document = schema.to_dict()
    if title is not None:
        document["$schema"] = DRAFT_URI
        document["title"] = f"{title} Schema"
        document["description"] = description or f"JSON schema for {title} payloads"
    return document


def dumps_document(document: Dict[str, Any], indent: Optional[int] = DEFAULT_INDENT) -> str:
    return json.dumps(document, indent=indent)


def write_schema(
    schema: Schema,
    output_path: Path,
    *,
    title: Optional[str] = None,
    description: Optional[str] = None,
    indent: Optional[int] = DEFAULT_INDENT,
) -> Path:
    """Write a schema document to ``output_path``, creating parent directories."""
    document = schema_document(schema, title, description)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(dumps_document(document, indent))
            f.write("\n")
    except OSError as e:
        raise CoreError(
            f"Cannot write schema to {output_path}",
            ErrorCode.OUTPUT_ERROR,
            context={"output_path": str(output_path)},
            original_error=e,
        )
    return output_path
