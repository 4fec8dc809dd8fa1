"""Declared-field enumeration for record types.

Supported records: dataclasses, pydantic models, TypedDicts and NamedTuples.
Fields are yielded in declaration order together with their raw tag string.
"""

from __future__ import annotations
import dataclasses
import inspect
import logging
import sys
import typing
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from pydantic import BaseModel

from .tags import DEFAULT_TAG_KEY, tag_from_annotation, tag_from_mapping, tag_from_metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordField:
    name: str
    annotation: Any
    raw_tag: Optional[str] = None


def _resolve(raw: Any, globalns: Dict[str, Any], localns: Dict[str, Any]) -> Any:
    # TypedDict keeps postponed annotations as ForwardRef objects
    if isinstance(raw, typing.ForwardRef):
        raw = raw.__forward_arg__
    if not isinstance(raw, str):
        return raw
    try:
        return eval(raw, globalns, localns)
    except Exception as e:
        logger.debug("Cannot resolve annotation %r: %s", raw, e)
        return raw


def _own_annotations(klass: type) -> Dict[str, Any]:
    try:
        return inspect.get_annotations(klass)
    except NameError as e:
        logger.debug("Cannot read annotations of %s: %s", klass.__name__, e)
        return {}


def _type_hints(record: type) -> Dict[str, Any]:
    try:
        return typing.get_type_hints(record, include_extras=True)
    except (NameError, TypeError) as e:
        logger.debug("Resolving annotations of %s field by field: %s", record.__name__, e)

    # Only the fields that fail to resolve degrade to unrepresentable kinds.
    localns = dict(vars(record))
    hints: Dict[str, Any] = {}
    for klass in reversed(record.__mro__):
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        for name, raw in _own_annotations(klass).items():
            hints[name] = _resolve(raw, globalns, localns)
    return hints


def _dataclass_fields(record: type, tag_key: str) -> Iterator[RecordField]:
    hints = _type_hints(record)
    for f in dataclasses.fields(record):
        annotation = hints.get(f.name, f.type)
        if isinstance(annotation, str) and not isinstance(f.type, str):
            annotation = f.type
        raw = tag_from_annotation(annotation) or tag_from_mapping(f.metadata, tag_key)
        yield RecordField(f.name, annotation, raw)


def _pydantic_fields(record: type, tag_key: str) -> Iterator[RecordField]:
    for name, info in record.model_fields.items():
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else None
        raw = (
            tag_from_metadata(info.metadata)
            or tag_from_annotation(info.annotation)
            or tag_from_mapping(extra, tag_key)
        )
        yield RecordField(info.alias or name, info.annotation, raw)


def _annotated_fields(record: type) -> Iterator[RecordField]:
    # TypedDict and NamedTuple: annotations only, in declaration order.
    for name, annotation in _type_hints(record).items():
        yield RecordField(name, annotation, tag_from_annotation(annotation))


def iter_fields(record: type, tag_key: str = DEFAULT_TAG_KEY) -> Iterator[RecordField]:
    if dataclasses.is_dataclass(record):
        return _dataclass_fields(record, tag_key)
    if issubclass(record, BaseModel):
        return _pydantic_fields(record, tag_key)
    return _annotated_fields(record)
