from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from utils.constants import INCOME, EXPENSE, TRANSACTION_KINDS
from utils.date_helpers import format_date


def parse_amount(raw) -> Decimal:
    """Parse a backend or user-entered amount into a Decimal.

    Raises:
        ValueError: if the value is not a finite number
    """
    if isinstance(raw, float):
        raw = repr(raw)
    try:
        amount = Decimal(str(raw).strip().replace(",", "."))
    except (InvalidOperation, AttributeError) as e:
        raise ValueError(f"Invalid amount: {raw!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {raw!r}")
    return amount


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: Decimal
    category: str                   # category code
    kind: str                       # 'INCOME' | 'EXPENSE'
    occurred_at: str                # backend timestamp, UTC-normalised
    description: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.kind == INCOME

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.kind == INCOME else -self.amount

    def with_kind(self, kind: str) -> "Transaction":
        return replace(self, kind=kind)

    @classmethod
    def from_payload(cls, data: dict, kind: str | None = None) -> "Transaction":
        """Build from a backend record.

        Create and update responses do not echo the kind, so the caller
        supplies it; otherwise the record's ``type`` is used.
        """
        kind = kind or data.get("type")
        if kind not in TRANSACTION_KINDS:
            raise ValueError(f"Unknown transaction kind: {kind!r}")
        amount = parse_amount(data["amount"])
        if amount < 0:
            raise ValueError(f"Negative amount in transaction {data['id']}")
        return cls(
            id=str(data["id"]),
            amount=amount,
            category=data["category"],
            kind=kind,
            occurred_at=data["date"],
            description=data.get("description") or None,
        )


@dataclass
class TransactionDraft:
    """Request body for create and update.

    Absent optional fields are left out of the payload entirely.
    """
    amount: Decimal
    category: str
    description: Optional[str] = None
    timestamp: Optional[str] = None  # 'YYYY-MM-DD' or the original timestamp

    def to_payload(self) -> dict:
        payload = {
            "amount": float(self.amount),
            "category": self.category,
        }
        description = (self.description or "").strip()
        if description:
            payload["description"] = description
        if self.timestamp:
            payload["date"] = self.timestamp
        return payload

    @classmethod
    def for_new(
        cls,
        amount: Decimal,
        category: str,
        description: str | None,
        on_date: date | None,
        today: date,
    ) -> "TransactionDraft":
        """Draft for a new transaction; today's date is left to the server."""
        date_str = format_date(on_date) if on_date and on_date != today else None
        return cls(amount=amount, category=category, description=description, timestamp=date_str)

    @classmethod
    def for_update(
        cls,
        original: Transaction,
        amount: Decimal,
        description: str | None,
    ) -> "TransactionDraft":
        """Draft for an edit: category and timestamp are carried over unchanged."""
        return cls(
            amount=amount,
            category=original.category,
            description=description,
            timestamp=original.occurred_at,
        )


KIND_LABEL_KEYS = {
    INCOME: "common.income",
    EXPENSE: "common.expense",
}
