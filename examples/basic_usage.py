from dataclasses import dataclass, field
from typing import Annotated, Dict, List

from shape_schema import Tag, load


@dataclass
class Address:
    street: str = ""
    postcode: Annotated[str, Tag("zip,omitempty")] = ""


@dataclass
class Customer:
    name: str
    age: int = field(default=0, metadata={"json": "age,omitempty"})
    address: Address = field(default_factory=Address)
    tags: List[str] = field(default_factory=list)
    scores: Dict[str, float] = field(default_factory=dict)
    avatar: bytes = b""


print(load(Customer("Ada")))
