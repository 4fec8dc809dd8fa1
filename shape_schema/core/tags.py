"""Field tag parsing.

A field tag is a string of the form ``name,opt1,opt2,...``. The text before the
first comma is the serialized field name (may be empty); everything after it is
a comma-separated option list. A missing tag means: use the field's own name
and treat the field as required.

Tags can be attached to a field in three ways (first match wins):

- ``Annotated[int, Tag("count,omitempty")]``
- ``dataclasses.field(metadata={"json": "count,omitempty"})``
- ``pydantic.Field(json_schema_extra={"json": "count,omitempty"})``
"""

from __future__ import annotations
import typing
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Iterable, Mapping, Optional

from .kinds import unwrap_once

DEFAULT_TAG_KEY = "json"
OMIT_EMPTY = "omitempty"


@dataclass(frozen=True)
class Tag:
    """Marker carrying a raw tag string inside ``Annotated[...]``."""

    value: str


@dataclass(frozen=True)
class FieldTag:
    name: Optional[str] = None
    options: FrozenSet[str] = field(default_factory=frozenset)
    omit_option: str = OMIT_EMPTY

    def has_option(self, option: str) -> bool:
        return option in self.options

    @property
    def omit_empty(self) -> bool:
        return self.has_option(self.omit_option)

    @property
    def required(self) -> bool:
        """A field is required unless its tag marks it omit-if-empty."""
        return not self.omit_empty

    def resolve_name(self, default: str) -> str:
        return self.name or default


def parse_tag(raw: Optional[str], omit_option: str = OMIT_EMPTY) -> FieldTag:
    """Split ``name,opt1,opt2`` into a FieldTag.

    Examples:
        >>> parse_tag("b,omitempty").name
        'b'
        >>> parse_tag(",omitempty").name is None
        True
        >>> parse_tag(None).required
        True
    """
    if not raw:
        return FieldTag(omit_option=omit_option)
    name, sep, rest = raw.partition(",")
    options = frozenset(token for token in rest.split(",") if token) if sep else frozenset()
    return FieldTag(name=name or None, options=options, omit_option=omit_option)


def tag_from_metadata(extras: Iterable[Any]) -> Optional[str]:
    """First ``Tag`` marker among Annotated extras or pydantic field metadata."""
    for extra in extras:
        if isinstance(extra, Tag):
            return extra.value
    return None


def tag_from_annotation(annotation: Any) -> Optional[str]:
    """Tag marker of an Annotated layer, also when nested in Optional, Required or NewType."""
    while annotation is not None:
        if typing.get_origin(annotation) is typing.Annotated:
            raw = tag_from_metadata(typing.get_args(annotation)[1:])
            if raw is not None:
                return raw
        annotation = unwrap_once(annotation)
    return None


def tag_from_mapping(mapping: Optional[Mapping[str, Any]], tag_key: str) -> Optional[str]:
    if not mapping:
        return None
    raw = mapping.get(tag_key)
    return raw if isinstance(raw, str) else None
