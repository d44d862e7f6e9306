from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    content: list[T] = field(default_factory=list)
    page: int = 0
    has_next: bool = False

    @classmethod
    def from_payload(cls, data, parse: Callable[[dict], T], page: int = 0) -> "Page[T]":
        """Accept a page envelope ({content, hasNext}) or a bare JSON list."""
        if isinstance(data, list):
            return cls(content=[parse(item) for item in data], page=page, has_next=False)
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected list response: {type(data).__name__}")
        items = data.get("content") or []
        has_next = data.get("hasNext")
        if has_next is None and "last" in data:
            has_next = not data["last"]
        return cls(
            content=[parse(item) for item in items],
            page=data.get("number", page),
            has_next=bool(has_next),
        )
