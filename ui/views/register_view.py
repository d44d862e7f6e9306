from typing import Callable

import customtkinter as ctk

from services.auth_service import AuthService
from services.locale_service import Locale
from ui.components.language_switcher import LanguageSwitcher
from ui.messages import error_message


class RegisterView(ctk.CTkFrame):
    """Sign-up card. A successful registration signs the user straight in."""

    def __init__(
        self,
        master,
        auth_service: AuthService,
        locale: Locale,
        notify: Callable[..., None],
        on_authenticated: Callable[[], None],
        on_show_login: Callable[[], None],
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._auth = auth_service
        self._locale = locale
        self._notify = notify
        self._on_authenticated = on_authenticated

        t = locale.t
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        LanguageSwitcher(self, locale).grid(row=0, column=0, sticky="e", padx=16, pady=12)

        card = ctk.CTkFrame(self, corner_radius=12)
        card.grid(row=1, column=0)
        card.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            card, text=t("auth.registerTitle"), font=ctk.CTkFont(size=20, weight="bold"),
        ).grid(row=0, column=0, padx=32, pady=(24, 0))
        ctk.CTkLabel(
            card, text=t("auth.registerDescription"), text_color="gray60",
        ).grid(row=1, column=0, padx=32, pady=(0, 16))

        self._name = self._entry(card, 2, t("auth.username"))
        self._email = self._entry(card, 3, t("auth.email"))
        self._password = self._entry(card, 4, t("auth.password"), secret=True)
        self._confirm = self._entry(card, 5, t("auth.confirmPassword"), secret=True)
        self._confirm.bind("<Return>", lambda _e: self._on_submit())

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            card, textvariable=self._error_var, text_color="#F44336", wraplength=280,
        ).grid(row=6, column=0, padx=32)

        self._submit_btn = ctk.CTkButton(card, text=t("auth.register"), width=280, command=self._on_submit)
        self._submit_btn.grid(row=7, column=0, padx=32, pady=(4, 8))

        switch = ctk.CTkFrame(card, fg_color="transparent")
        switch.grid(row=8, column=0, padx=32, pady=(0, 24))
        ctk.CTkLabel(switch, text=t("auth.haveAccount"), text_color="gray60").pack(side="left")
        ctk.CTkButton(
            switch, text=t("auth.login"), width=60,
            fg_color="transparent", text_color=("#1f6aa5", "#5fa8e8"), hover=False,
            command=on_show_login,
        ).pack(side="left")

        self._name.focus_set()

    def _entry(self, card, row: int, placeholder: str, secret: bool = False) -> ctk.CTkEntry:
        entry = ctk.CTkEntry(card, width=280, placeholder_text=placeholder, show="•" if secret else "")
        entry.grid(row=row, column=0, padx=32, pady=4)
        return entry

    def _on_submit(self):
        self._error_var.set("")
        self._submit_btn.configure(state="disabled", text=self._locale.t("common.loading"))
        try:
            self._auth.register(
                email=self._email.get(),
                password=self._password.get(),
                confirm_password=self._confirm.get(),
                name=self._name.get(),
                on_done=self._on_done,
                on_error=self._on_failed,
            )
        except ValueError as e:
            self._submit_btn.configure(state="normal", text=self._locale.t("auth.register"))
            self._error_var.set(self._locale.t(str(e)))

    def _on_done(self):
        self._notify(self._locale.t("auth.registerSuccess"), severity="success")
        self._on_authenticated()

    def _on_failed(self, exc: Exception):
        if not self.winfo_exists():
            return
        self._submit_btn.configure(state="normal", text=self._locale.t("auth.register"))
        self._error_var.set(error_message(self._locale, exc, "auth.registerError"))
