import customtkinter as ctk

from services.locale_service import Locale
from utils.constants import LANGUAGES


class LanguageSwitcher(ctk.CTkFrame):
    """Combo of the supported UI languages; picking one switches the whole app."""

    def __init__(self, master, locale: Locale, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._locale = locale
        self._names = {lang["name"]: lang["code"] for lang in LANGUAGES}
        current = next((lang["name"] for lang in LANGUAGES if lang["code"] == locale.code), "")

        ctk.CTkLabel(self, text="🌐").pack(side="left", padx=(0, 4))
        self._var = ctk.StringVar(value=current)
        ctk.CTkComboBox(
            self,
            values=list(self._names),
            variable=self._var,
            width=120,
            state="readonly",
            command=self._on_selected,
        ).pack(side="left")

    def _on_selected(self, name: str):
        code = self._names.get(name)
        if code and code != self._locale.code:
            self._locale.set(code)
