import json
import logging
from pathlib import Path
from typing import Callable

from utils.app_config import AppConfig
from utils.constants import SUPPORTED_LOCALES, DEFAULT_LOCALE, FALLBACK_TRANSLATIONS
from utils.date_helpers import icu_locale

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"


class Locale:
    """Active UI language and its translation table.

    t() looks up dotted keys ('calendar.title') and returns the key itself
    when a string is missing, so gaps stay visible in the UI.
    """

    def __init__(self, config: AppConfig, locales_dir: Path = LOCALES_DIR):
        self._config = config
        self._dir = Path(locales_dir)
        self._code = DEFAULT_LOCALE
        self._translations: dict = {}
        self._listeners: list[Callable[[str], None]] = []

    @property
    def code(self) -> str:
        return self._code

    @property
    def icu(self) -> str:
        return icu_locale(self._code)

    def restore(self) -> None:
        saved = self._config.get("locale")
        if saved in SUPPORTED_LOCALES:
            self._code = saved
        self._translations = self._load(self._code)

    def set(self, code: str) -> None:
        if code not in SUPPORTED_LOCALES:
            raise ValueError(f"Unsupported locale: {code}")
        self._code = code
        self._config.update(locale=code)
        self._translations = self._load(code)
        for listener in list(self._listeners):
            listener(code)

    def on_change(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def t(self, key: str) -> str:
        value = self._translations
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return key
        return value if isinstance(value, str) else key

    def _load(self, code: str) -> dict:
        try:
            return self._read(code)
        except (OSError, ValueError) as e:
            logger.error("Failed to load translations", extra={"locale": code, "error": str(e)})
        if code == FALLBACK_TRANSLATIONS:
            return {}
        try:
            return self._read(FALLBACK_TRANSLATIONS)
        except (OSError, ValueError) as e:
            logger.error("Failed to load fallback translations", extra={"error": str(e)})
            return {}

    def _read(self, code: str) -> dict:
        with open(self._dir / f"{code}.json", "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{code}.json is not an object")
        return data
