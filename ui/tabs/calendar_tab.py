from datetime import date
from typing import Callable

import customtkinter as ctk

from models.calendar import CalendarCell
from services.category_service import CategoryService
from services.calendar_service import DAYS_IN_WEEK, build_month_grid, month_title, weekday_names
from services.dispatcher import Dispatcher
from services.locale_service import Locale
from services.transaction_service import TransactionService
from services.transaction_store import TransactionStore
from ui.components.day_transactions_dialog import DayTransactionsDialog
from ui.components.transaction_form import TransactionForm
from ui.messages import error_message
from utils.constants import INCOME, EXPENSE, KIND_COLORS
from utils.currency import format_signed
from utils.date_helpers import add_months, first_of_month, today

_TODAY_BORDER = "#1f6aa5"


class CalendarTab(ctk.CTkFrame):
    """Month grid of daily transaction counts and net totals."""

    def __init__(
        self,
        master,
        store: TransactionStore,
        tx_service: TransactionService,
        category_service: CategoryService,
        dispatcher: Dispatcher,
        locale: Locale,
        notify: Callable[..., None],
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._store = store
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._dispatcher = dispatcher
        self._locale = locale
        self._notify = notify
        self._month = first_of_month(store.month or today())

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._build_header()
        self._build_month_nav()
        self._build_weekdays()
        self._build_grid()
        self._load()

    def refresh(self):
        self._load()

    def redraw(self):
        """Re-render from the store without going to the backend."""
        if self.winfo_exists():
            self._render()

    # ── Layout ───────────────────────────────────────────────────────────────

    def _build_header(self):
        t = self._locale.t
        header = ctk.CTkFrame(self, fg_color="transparent")
        header.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 0))
        header.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            header, text=t("calendar.title"),
            font=ctk.CTkFont(size=18, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="w")
        ctk.CTkLabel(
            header, text=t("calendar.description"), text_color="gray60", anchor="w",
        ).grid(row=1, column=0, sticky="w")

        ctk.CTkButton(
            header, text=f"+ {t('calendar.addExpense')}",
            fg_color=KIND_COLORS[EXPENSE], hover_color="#D32F2F",
            command=lambda: self._open_add(EXPENSE),
        ).grid(row=0, column=1, rowspan=2, padx=4)
        ctk.CTkButton(
            header, text=f"+ {t('calendar.addIncome')}",
            fg_color=KIND_COLORS[INCOME], hover_color="#388E3C",
            command=lambda: self._open_add(INCOME),
        ).grid(row=0, column=2, rowspan=2, padx=(4, 0))

    def _build_month_nav(self):
        nav = ctk.CTkFrame(self, fg_color="transparent")
        nav.grid(row=1, column=0, sticky="ew", padx=16, pady=(12, 4))
        ctk.CTkButton(nav, text="◀", width=28, command=self._prev_month).pack(side="left")
        self._month_label = ctk.CTkLabel(
            nav, text="", font=ctk.CTkFont(size=15, weight="bold"), width=180, anchor="center",
        )
        self._month_label.pack(side="left", padx=8)
        ctk.CTkButton(nav, text="▶", width=28, command=self._next_month).pack(side="left")
        ctk.CTkButton(
            nav, text=self._locale.t("calendar.today"), width=70,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._go_today,
        ).pack(side="left", padx=(12, 0))

    def _build_weekdays(self):
        row = ctk.CTkFrame(self, fg_color="transparent")
        row.grid(row=2, column=0, sticky="ew", padx=16)
        for col, name in enumerate(weekday_names(self._locale.code)):
            row.grid_columnconfigure(col, weight=1, uniform="weekday")
            ctk.CTkLabel(
                row, text=name, text_color="gray60", font=ctk.CTkFont(size=12, weight="bold"),
            ).grid(row=0, column=col, sticky="ew")

    def _build_grid(self):
        self._grid = ctk.CTkFrame(self, fg_color="transparent")
        self._grid.grid(row=3, column=0, sticky="nsew", padx=16, pady=(4, 12))
        for col in range(DAYS_IN_WEEK):
            self._grid.grid_columnconfigure(col, weight=1, uniform="day")

    # ── Navigation ───────────────────────────────────────────────────────────

    def _prev_month(self):
        self._month = add_months(self._month, -1)
        self._load()

    def _next_month(self):
        self._month = add_months(self._month, 1)
        self._load()

    def _go_today(self):
        self._month = first_of_month(today())
        self._load()

    # ── Data ─────────────────────────────────────────────────────────────────

    def _load(self):
        self._month_label.configure(text=month_title(self._month, self._locale.code))
        self._render()
        self._store.load_month(self._month, on_error=self._on_load_failed)

    def _on_load_failed(self, exc: Exception):
        self._notify(
            self._locale.t("calendar.loadError"),
            error_message(self._locale, exc, "auth.tryAgain"),
            severity="error",
        )

    # ── Rendering ────────────────────────────────────────────────────────────

    def _render(self):
        for w in self._grid.winfo_children():
            w.destroy()

        cells = build_month_grid(self._month)
        weeks = (len(cells) + DAYS_IN_WEEK - 1) // DAYS_IN_WEEK
        for r in range(weeks):
            self._grid.grid_rowconfigure(r, weight=1, uniform="week")

        current = today()
        for idx, cell in enumerate(cells):
            self._add_cell(idx // DAYS_IN_WEEK, idx % DAYS_IN_WEEK, cell, current)

    def _add_cell(self, row: int, col: int, cell: CalendarCell, current: date):
        if cell.is_blank:
            ctk.CTkFrame(self._grid, fg_color="transparent").grid(
                row=row, column=col, sticky="nsew", padx=2, pady=2)
            return

        day = cell.day
        is_today = day == current
        frame = ctk.CTkFrame(
            self._grid, fg_color=("gray90", "gray20"), corner_radius=6,
            border_width=2 if is_today else 0,
            border_color=_TODAY_BORDER,
        )
        frame.grid(row=row, column=col, sticky="nsew", padx=2, pady=2)
        frame.grid_columnconfigure(0, weight=1)

        labels = [ctk.CTkLabel(
            frame, text=str(day.day), anchor="nw",
            font=ctk.CTkFont(size=13, weight="bold"),
            text_color=_TODAY_BORDER if is_today else ("gray10", "gray90"),
        )]
        labels[0].grid(row=0, column=0, sticky="ew", padx=6, pady=(4, 0))

        summary = self._store.summary_for(day)
        if summary.count:
            count = ctk.CTkLabel(
                frame, text=f"{summary.count} {self._locale.t('calendar.transactionsShort')}",
                text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
            )
            count.grid(row=1, column=0, sticky="ew", padx=6)
            total = ctk.CTkLabel(
                frame, text=format_signed(summary.total, self._locale.code),
                text_color=KIND_COLORS[INCOME] if summary.total >= 0 else KIND_COLORS[EXPENSE],
                font=ctk.CTkFont(size=11, weight="bold"), anchor="w",
            )
            total.grid(row=2, column=0, sticky="ew", padx=6, pady=(0, 4))
            labels += [count, total]

        for widget in [frame, *labels]:
            widget.bind("<Button-1>", lambda _e, d=day: self._open_day(d))

    # ── Dialogs ──────────────────────────────────────────────────────────────

    def _open_day(self, day: date):
        DayTransactionsDialog(
            self.winfo_toplevel(),
            day=day,
            store=self._store,
            tx_service=self._tx_svc,
            locale=self._locale,
            on_add=self._open_add,
            notify=self._notify,
        )

    def _open_add(self, kind: str, on_date: date | None = None):
        form = TransactionForm(
            self.winfo_toplevel(),
            kind=kind,
            store=self._store,
            tx_service=self._tx_svc,
            category_service=self._cat_svc,
            dispatcher=self._dispatcher,
            locale=self._locale,
            selected_date=on_date,
        )
        self.wait_window(form)
        if form.created:
            self._notify(self._locale.t("transactions.createSuccess"), severity="success")
