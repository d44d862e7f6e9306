from dataclasses import dataclass
from typing import Optional

from utils.constants import TRANSACTION_KINDS


@dataclass(frozen=True)
class Category:
    code: str
    name: str
    kind: str           # 'INCOME' | 'EXPENSE'
    description: Optional[str] = None
    id: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict) -> "Category":
        kind = data.get("type")
        if kind not in TRANSACTION_KINDS:
            raise ValueError(f"Unknown category type: {kind!r}")
        raw_id = data.get("id")
        return cls(
            code=data["code"],
            name=data["name"],
            kind=kind,
            description=data.get("description") or None,
            id=str(raw_id) if raw_id is not None else None,
        )


@dataclass
class CategoryDraft:
    code: str
    name: str
    kind: str
    description: Optional[str] = None

    def to_payload(self) -> dict:
        payload = {
            "code": self.code.strip(),
            "name": self.name.strip(),
            "type": self.kind,
        }
        description = (self.description or "").strip()
        if description:
            payload["description"] = description
        return payload
