from decimal import Decimal

from babel.numbers import format_decimal

from utils.constants import CURRENCY_SYMBOL
from utils.date_helpers import icu_locale


def format_currency(amount: Decimal, locale: str, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format an amount with the locale's grouping, e.g. '1 234,5 ₽' for ru."""
    return f"{format_decimal(amount, locale=icu_locale(locale))} {symbol}"


def format_signed(amount: Decimal, locale: str, symbol: str = CURRENCY_SYMBOL) -> str:
    """Format with an explicit sign; zero is shown as a gain."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{format_currency(abs(amount), locale, symbol)}"
