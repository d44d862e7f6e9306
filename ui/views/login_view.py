from typing import Callable

import customtkinter as ctk

from services.auth_service import AuthService
from services.locale_service import Locale
from ui.components.language_switcher import LanguageSwitcher
from ui.messages import error_message


class LoginView(ctk.CTkFrame):
    """Sign-in card shown while nobody is authenticated."""

    def __init__(
        self,
        master,
        auth_service: AuthService,
        locale: Locale,
        notify: Callable[..., None],
        on_authenticated: Callable[[], None],
        on_show_register: Callable[[], None],
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
            card, text=t("auth.loginTitle"), font=ctk.CTkFont(size=20, weight="bold"),
        ).grid(row=0, column=0, padx=32, pady=(24, 0))
        ctk.CTkLabel(
            card, text=t("auth.loginDescription"), text_color="gray60",
        ).grid(row=1, column=0, padx=32, pady=(0, 16))

        self._username = username = ctk.CTkEntry(
            card, width=280, placeholder_text=t("auth.username"),
        )
        username.grid(row=2, column=0, padx=32, pady=4)

        self._password = password = ctk.CTkEntry(
            card, width=280, show="•", placeholder_text=t("auth.password"),
        )
        password.grid(row=3, column=0, padx=32, pady=4)
        password.bind("<Return>", lambda _e: self._on_submit())

        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            card, textvariable=self._error_var, text_color="#F44336", wraplength=280,
        ).grid(row=4, column=0, padx=32)

        self._submit_btn = ctk.CTkButton(card, text=t("auth.login"), width=280, command=self._on_submit)
        self._submit_btn.grid(row=5, column=0, padx=32, pady=(4, 8))

        switch = ctk.CTkFrame(card, fg_color="transparent")
        switch.grid(row=6, column=0, padx=32, pady=(0, 24))
        ctk.CTkLabel(switch, text=t("auth.noAccount"), text_color="gray60").pack(side="left")
        ctk.CTkButton(
            switch, text=t("auth.register"), width=60,
            fg_color="transparent", text_color=("#1f6aa5", "#5fa8e8"), hover=False,
            command=on_show_register,
        ).pack(side="left")

        username.focus_set()

    def _on_submit(self):
        self._error_var.set("")
        self._submit_btn.configure(state="disabled", text=self._locale.t("common.loading"))
        try:
            self._auth.login(
                self._username.get(),
                self._password.get(),
                on_done=self._on_done,
                on_error=self._on_failed,
            )
        except ValueError as e:
            self._submit_btn.configure(state="normal", text=self._locale.t("auth.login"))
            self._error_var.set(self._locale.t(str(e)))

    def _on_done(self):
        self._notify(self._locale.t("auth.welcome"), severity="success")
        self._on_authenticated()

    def _on_failed(self, exc: Exception):
        if not self.winfo_exists():
            return
        self._submit_btn.configure(state="normal", text=self._locale.t("auth.login"))
        self._error_var.set(error_message(self._locale, exc, "auth.loginError"))
