"""Record types shared by the mapper, CLI and script tests."""

from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, List, NamedTuple, Optional, TypedDict

from pydantic import BaseModel, Field

from shape_schema import Tag


@dataclass
class Simple:
    A: str = ""
    B: int = field(default=0, metadata={"json": "b,omitempty"})


@dataclass
class Address:
    street: str = ""
    postcode: Annotated[str, Tag("zip,omitempty")] = ""


@dataclass
class Customer:
    name: str = ""
    address: Address = field(default_factory=Address)
    tags: List[str] = field(default_factory=list)
    scores: Dict[str, float] = field(default_factory=dict)
    avatar: bytes = b""
    nickname: Optional[str] = field(default=None, metadata={"json": ",omitempty"})


@dataclass
class Order:
    id: int = 0
    customer: Customer = field(default_factory=Customer)
    lines: List[Address] = field(default_factory=list)
    totals: Dict[str, Customer] = field(default_factory=dict)
    notes: Any = None


@dataclass
class Node:
    value: int = 0
    parent: Optional["Node"] = None


class Invoice(BaseModel):
    number: str
    amount: float = Field(0.0, json_schema_extra={"json": "total,omitempty"})
    paid: Annotated[bool, Tag("is_paid")] = False
    currency: str = Field("USD", alias="currencyCode")


class Point(NamedTuple):
    x: float
    y: Annotated[float, Tag("y,omitempty")]


class Settings(TypedDict):
    retries: int
    hosts: List[str]


DEFAULT_SIMPLE = Simple(A="a", B=1)
