from decimal import Decimal

from utils.currency import format_currency, format_signed


def test_english_grouping():
    assert format_currency(Decimal("1234.5"), "en") == "1,234.5 ₽"


def test_signed_amounts():
    assert format_signed(Decimal("-5"), "en") == "-5 ₽"
    assert format_signed(Decimal("60"), "en") == "+60 ₽"
    assert format_signed(Decimal("0"), "en") == "+0 ₽"


def test_unknown_locale_formats_like_russian():
    amount = Decimal("1234567.89")
    assert format_currency(amount, "xx") == format_currency(amount, "ru")
    assert format_currency(amount, "ru").endswith(" ₽")
