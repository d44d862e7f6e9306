APP_WIDTH = 1100
APP_HEIGHT = 720
SERVICE_NAME = "expense-calendar"

DATE_FORMAT = "%Y-%m-%d"

INCOME = "INCOME"
EXPENSE = "EXPENSE"
TRANSACTION_KINDS = (INCOME, EXPENSE)

SUPPORTED_LOCALES = ("en", "th", "ru")
DEFAULT_LOCALE = "ru"
FALLBACK_TRANSLATIONS = "en"

# UI tag → CLDR locale used for dates and numbers
LOCALE_MAP = {
    "en": "en_US",
    "th": "th_TH",
    "ru": "ru_RU",
}
DEFAULT_ICU_LOCALE = "ru_RU"

LANGUAGES = [
    {"code": "en", "name": "English"},
    {"code": "th", "name": "ไทย"},
    {"code": "ru", "name": "Русский"},
]

CURRENCY_SYMBOL = "₽"

KIND_COLORS = {
    INCOME: "#4CAF50",
    EXPENSE: "#F44336",
}

SEVERITY_COLORS = {
    "error":   "#F44336",
    "success": "#4CAF50",
    "info":    "#2196F3",
}

TOAST_DURATION_MS = 4000
