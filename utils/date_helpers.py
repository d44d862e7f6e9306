import calendar
import re
from datetime import date, datetime, timezone, tzinfo

from babel.dates import format_date as babel_format_date

from utils.constants import DATE_FORMAT, LOCALE_MAP, DEFAULT_ICU_LOCALE

# Backends emit anywhere from 1 to 9 fraction digits; datetime wants exactly 6
_FRACTION_RE = re.compile(r"\.(\d+)")
_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DateLike = date | datetime | str


def today() -> date:
    return date.today()


def parse_date(date_str: str) -> date | None:
    """Parse a date string in YYYY-MM-DD format, returning None on failure."""
    if not date_str:
        return None
    for fmt in ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d"):
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


# ── Month arithmetic ─────────────────────────────────────────────────────────

def first_of_month(d: date) -> date:
    return date(d.year, d.month, 1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day_to_month(year: int, month: int, day: int) -> int:
    """Clamp day to valid range for the given year/month."""
    return min(day, days_in_month(year, month))


def add_months(d: date, n: int) -> date:
    """Add n months to date d, clamping day to month end."""
    month = d.month - 1 + n
    year = d.year + month // 12
    month = month % 12 + 1
    day = clamp_day_to_month(year, month, d.day)
    return d.replace(year=year, month=month, day=day)


# ── Backend timestamps → local calendar dates ────────────────────────────────

def parse_timestamp(value: str) -> datetime:
    """Parse a backend timestamp.

    ``Z`` and explicit offsets give an aware datetime. A bare ``YYYY-MM-DD``
    is midnight UTC. A date-time without offset is returned naive and is
    read as local time by the callers.

    Raises:
        ValueError: if the string is not ISO 8601
    """
    text = value.strip()
    if _DATE_ONLY_RE.match(text):
        return datetime.fromisoformat(text).replace(tzinfo=timezone.utc)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    return datetime.fromisoformat(text)


def to_local_date(value: DateLike, tz: tzinfo | None = None) -> date:
    """Return the calendar date of value in tz (runtime local zone when None).

    Plain dates pass through untouched; naive datetimes are already local.
    """
    if isinstance(value, str):
        value = parse_timestamp(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.date()
        return value.astimezone(tz).date()
    return value


def local_date_string(value: DateLike, tz: tzinfo | None = None) -> str:
    return format_date(to_local_date(value, tz))


def same_day(a: DateLike, b: DateLike, tz: tzinfo | None = None) -> bool:
    return to_local_date(a, tz) == to_local_date(b, tz)


def same_month(a: DateLike, b: DateLike, tz: tzinfo | None = None) -> bool:
    da, db = to_local_date(a, tz), to_local_date(b, tz)
    return (da.year, da.month) == (db.year, db.month)


# ── Locale-aware rendering ───────────────────────────────────────────────────

def icu_locale(locale: str) -> str:
    """Map a UI locale tag to its CLDR locale; unknown tags fall back to Russian."""
    return LOCALE_MAP.get(locale, DEFAULT_ICU_LOCALE)


def format_date_for_locale(
    value: DateLike,
    locale: str,
    fmt: str = "long",
    tz: tzinfo | None = None,
) -> str:
    """Render a date with the locale's month names and ordering.

    fmt is a CLDR width ('short', 'medium', 'long', 'full') or a pattern;
    'full' includes the weekday.
    """
    return babel_format_date(to_local_date(value, tz), format=fmt, locale=icu_locale(locale))
