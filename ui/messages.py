from api.errors import ApiError
from services.locale_service import Locale


def error_message(locale: Locale, exc: Exception, fallback_key: str) -> str:
    """Text for a failed operation.

    Validation messages are translation keys; backend messages are shown
    as-is (t() hands back unknown keys untouched).
    """
    if isinstance(exc, ApiError) and exc.message:
        return locale.t(exc.message)
    return locale.t(fallback_key)
