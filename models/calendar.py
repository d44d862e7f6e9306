from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class CalendarCell:
    day: Optional[date] = None      # None = leading padding

    @property
    def is_blank(self) -> bool:
        return self.day is None


@dataclass(frozen=True)
class DaySummary:
    income: Decimal
    expense: Decimal
    total: Decimal
    count: int
