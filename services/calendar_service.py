"""Month grid and per-day aggregation for the calendar view.

Everything here is a pure function of its arguments. Transactions carry
UTC timestamps, so bucketing always goes through the local calendar date
(see utils.date_helpers.to_local_date); the optional ``tz`` argument pins
the zone, otherwise the runtime's local zone is used.
"""
import logging
from datetime import date, tzinfo
from decimal import Decimal
from typing import Iterable

from babel.dates import format_date as babel_format_date, get_day_names

from models.calendar import CalendarCell, DaySummary
from models.transaction import Transaction
from utils.constants import INCOME, EXPENSE
from utils.date_helpers import days_in_month, first_of_month, icu_locale, to_local_date

logger = logging.getLogger(__name__)

DAYS_IN_WEEK = 7


def sunday_first_weekday(d: date) -> int:
    """0 = Sunday … 6 = Saturday."""
    return (d.weekday() + 1) % DAYS_IN_WEEK


def build_month_grid(reference: date) -> list[CalendarCell]:
    """Cells for the month containing reference.

    Leading blanks pad the first week up to the 1st; the grid stops at the
    last day of the month with no trailing padding.
    """
    first = first_of_month(reference)
    leading = sunday_first_weekday(first)
    cells = [CalendarCell() for _ in range(leading)]
    cells.extend(
        CalendarCell(first.replace(day=day))
        for day in range(1, days_in_month(first.year, first.month) + 1)
    )
    return cells


def weekday_names(locale: str, width: str = "abbreviated") -> list[str]:
    """Localized column headers, Sunday first."""
    names = get_day_names(width, context="stand-alone", locale=icu_locale(locale))
    # babel keys days 0=Monday..6=Sunday
    return [names[6]] + [names[i] for i in range(6)]


def month_title(reference: date, locale: str) -> str:
    """E.g. 'February 2024' / 'февраль 2024'."""
    return babel_format_date(reference, format="LLLL y", locale=icu_locale(locale))


def _dated(transactions: Iterable[Transaction], tz: tzinfo | None):
    """Yield (local date, transaction); rows with an unreadable timestamp are skipped."""
    for t in transactions:
        try:
            yield to_local_date(t.occurred_at, tz), t
        except ValueError:
            logger.warning("Skipping transaction with invalid date", extra={"tx_id": t.id, "date": t.occurred_at})


def in_month(
    transactions: Iterable[Transaction], reference: date, tz: tzinfo | None = None
) -> list[Transaction]:
    return [
        t for d, t in _dated(transactions, tz)
        if (d.year, d.month) == (reference.year, reference.month)
    ]


def transactions_on(
    transactions: Iterable[Transaction], day: date, tz: tzinfo | None = None
) -> list[Transaction]:
    return [t for d, t in _dated(transactions, tz) if d == day]


def signed_total(transactions: Iterable[Transaction]) -> Decimal:
    """Income adds, expense subtracts; exact decimal arithmetic."""
    return sum((t.signed_amount for t in transactions), Decimal(0))


def _sum_kind(transactions: list[Transaction], kind: str) -> Decimal:
    return sum((t.amount for t in transactions if t.kind == kind), Decimal(0))


def summarize_day(transactions: Iterable[Transaction]) -> DaySummary:
    """Income, expense and net for one day, each summed on its own."""
    txs = list(transactions)
    return DaySummary(
        income=_sum_kind(txs, INCOME),
        expense=_sum_kind(txs, EXPENSE),
        total=signed_total(txs),
        count=len(txs),
    )
