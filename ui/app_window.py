import logging

import customtkinter as ctk

from api.auth_api import AuthApi
from services.auth_service import AuthService
from services.category_service import CategoryService
from services.locale_service import Locale
from services.session import EXPIRED, Session
from services.transaction_service import TransactionService
from services.transaction_store import TransactionStore
from ui.background import ThreadedDispatcher
from ui.components.alert_banner import AlertBanner
from ui.components.language_switcher import LanguageSwitcher
from ui.tabs.calendar_tab import CalendarTab
from ui.tabs.categories_tab import CategoriesTab
from ui.views.login_view import LoginView
from ui.views.register_view import RegisterView
from ui.windows import close_dialogs
from utils.constants import APP_WIDTH, APP_HEIGHT

logger = logging.getLogger(__name__)

_LOGIN = "login"
_REGISTER = "register"
_MAIN = "main"


class AppWindow(ctk.CTk):
    """Top-level window.

    Shows the auth screens until a session exists, then the Calendar and
    Categories tabs. Any backend call rejected with 401 ends the session
    and brings the login screen back.
    """

    def __init__(
        self,
        session: Session,
        locale: Locale,
        auth_api: AuthApi,
        tx_service: TransactionService,
        category_service: CategoryService,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._session = session
        self._locale = locale
        self._tx_svc = tx_service
        self._cat_svc = category_service

        self._dispatcher = ThreadedDispatcher(self, on_auth_failure=session.expire)
        self._auth_svc = AuthService(auth_api, session, self._dispatcher)
        self._store = TransactionStore(tx_service, self._dispatcher)

        self._screen = _MAIN if session.is_authenticated else _LOGIN
        self._content: ctk.CTkFrame | None = None
        self._calendar_tab: CalendarTab | None = None
        self._categories_tab: CategoriesTab | None = None

        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_banner_area()

        self._store.on_change(self._on_store_changed)
        self._session.on_end(self._on_session_end)
        self._locale.on_change(lambda _code: self.after(0, lambda: self._show(self._screen)))

        self._show(self._screen)

    # ── Screens ──────────────────────────────────────────────────────────────

    def _show(self, screen: str):
        self._screen = screen
        self.title(self._locale.t("app.title"))
        if self._content is not None:
            self._content.destroy()
        self._calendar_tab = None
        self._categories_tab = None

        if screen == _MAIN:
            self._content = self._build_main()
        elif screen == _REGISTER:
            self._content = RegisterView(
                self,
                auth_service=self._auth_svc,
                locale=self._locale,
                notify=self.notify,
                on_authenticated=lambda: self._show(_MAIN),
                on_show_login=lambda: self._show(_LOGIN),
            )
        else:
            self._content = LoginView(
                self,
                auth_service=self._auth_svc,
                locale=self._locale,
                notify=self.notify,
                on_authenticated=lambda: self._show(_MAIN),
                on_show_register=lambda: self._show(_REGISTER),
            )
        self._content.grid(row=1, column=0, sticky="nsew")

    def _build_main(self) -> ctk.CTkFrame:
        t = self._locale.t
        main = ctk.CTkFrame(self, fg_color="transparent", corner_radius=0)
        main.grid_columnconfigure(0, weight=1)
        main.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(main, fg_color=("gray85", "gray15"), corner_radius=0, height=44)
        bar.grid(row=0, column=0, sticky="ew")
        bar.pack_propagate(False)

        ctk.CTkLabel(
            bar, text=t("app.title"), font=ctk.CTkFont(size=14, weight="bold"),
        ).pack(side="left", padx=(12, 16), pady=8)

        ctk.CTkButton(
            bar, text=t("auth.logout"), width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._auth_svc.logout,
        ).pack(side="right", padx=(4, 12))
        user = self._session.user
        ctk.CTkLabel(
            bar, text=f"👤 {user.username}" if user else "", text_color="gray60",
        ).pack(side="right", padx=8)
        LanguageSwitcher(bar, self._locale).pack(side="right", padx=8)

        tabview = ctk.CTkTabview(main)
        tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))
        calendar_name = t("navigation.calendar")
        categories_name = t("navigation.categories")
        for tab_name in (calendar_name, categories_name):
            tabview.add(tab_name)
            tabview.tab(tab_name).grid_columnconfigure(0, weight=1)
            tabview.tab(tab_name).grid_rowconfigure(0, weight=1)

        self._calendar_tab = CalendarTab(
            tabview.tab(calendar_name),
            store=self._store,
            tx_service=self._tx_svc,
            category_service=self._cat_svc,
            dispatcher=self._dispatcher,
            locale=self._locale,
            notify=self.notify,
        )
        self._calendar_tab.grid(row=0, column=0, sticky="nsew")

        self._categories_tab = CategoriesTab(
            tabview.tab(categories_name),
            category_service=self._cat_svc,
            dispatcher=self._dispatcher,
            locale=self._locale,
            notify=self.notify,
        )
        self._categories_tab.grid(row=0, column=0, sticky="nsew")
        return main

    # ── Session ──────────────────────────────────────────────────────────────

    def _on_session_end(self, reason: str):
        logger.info("Session ended", extra={"reason": reason})
        closed = close_dialogs(self)
        if closed:
            logger.info("Closed open dialogs", extra={"count": closed})
        self._store.clear()
        self._show(_LOGIN)
        if reason == EXPIRED:
            self.notify(self._locale.t("auth.sessionExpired"), severity="error")

    def _on_store_changed(self):
        if self._calendar_tab is not None:
            self._calendar_tab.redraw()

    # ── Banners ──────────────────────────────────────────────────────────────

    def _build_banner_area(self):
        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=0, column=0, sticky="ew", padx=8)

    def notify(self, title: str, message: str = "", severity: str = "info"):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        banner = AlertBanner(self._banner_frame, title=title, message=message, severity=severity)
        banner.pack(fill="x", pady=2)
