from datetime import date
from typing import Callable

import customtkinter as ctk

from api.errors import ApiError
from models.transaction import KIND_LABEL_KEYS, Transaction
from services.locale_service import Locale
from services.transaction_service import TransactionService
from services.transaction_store import TransactionStore
from ui.components.confirm_dialog import ConfirmDialog
from ui.messages import error_message
from utils.constants import INCOME, EXPENSE, KIND_COLORS
from utils.currency import format_currency, format_signed
from utils.date_helpers import format_date_for_locale


class DayTransactionsDialog(ctk.CTkToplevel):
    """One day's transactions: income/expense/net summary, inline edit, delete.

    Amount and description are the only editable fields; the kind of an
    existing transaction never changes.
    """

    def __init__(
        self,
        master,
        day: date,
        store: TransactionStore,
        tx_service: TransactionService,
        locale: Locale,
        on_add: Callable[[str, date], None],
        notify: Callable[..., None],
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._day = day
        self._store = store
        self._tx_svc = tx_service
        self._locale = locale
        self._on_add = on_add
        self._notify = notify
        self._editing_id: str | None = None

        t = locale.t
        self.title(t("calendar.transactionsForDay"))
        self.geometry("520x560")
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        ctk.CTkLabel(
            self, text=format_date_for_locale(day, locale.code, fmt="full"),
            font=ctk.CTkFont(size=16, weight="bold"), anchor="w",
        ).grid(row=0, column=0, sticky="ew", padx=16, pady=(16, 0))
        ctk.CTkLabel(
            self, text=t("calendar.transactionsForDay"), text_color="gray60", anchor="w",
        ).grid(row=1, column=0, sticky="ew", padx=16)

        self._build_summary()
        self._build_list()
        self._build_buttons()

        self.transient(master)
        self._render()

    # ── Layout ───────────────────────────────────────────────────────────────

    def _build_summary(self):
        card = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        card.grid(row=2, column=0, sticky="ew", padx=16, pady=8)
        for col in range(3):
            card.grid_columnconfigure(col, weight=1)

        t = self._locale.t
        self._summary_values = {}
        for col, (key, caption) in enumerate((
            ("income", t("calendar.incomes")),
            ("expense", t("calendar.expenses")),
            ("total", t("common.total")),
        )):
            ctk.CTkLabel(card, text=caption, text_color="gray60").grid(row=0, column=col, pady=(8, 0))
            value = ctk.CTkLabel(card, text="", font=ctk.CTkFont(size=15, weight="bold"))
            value.grid(row=1, column=col, pady=(0, 8))
            self._summary_values[key] = value

    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=3, column=0, sticky="nsew", padx=16, pady=(0, 8))
        self._scroll.grid_columnconfigure(0, weight=1)

    def _build_buttons(self):
        t = self._locale.t
        bar = ctk.CTkFrame(self, fg_color="transparent")
        bar.grid(row=4, column=0, sticky="ew", padx=16, pady=(0, 16))
        bar.grid_columnconfigure((0, 1), weight=1)
        ctk.CTkButton(
            bar, text=f"+ {t('calendar.addExpense')}",
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._add(EXPENSE),
        ).grid(row=0, column=0, sticky="ew", padx=(0, 4))
        ctk.CTkButton(
            bar, text=f"+ {t('calendar.addIncome')}",
            command=lambda: self._add(INCOME),
        ).grid(row=0, column=1, sticky="ew", padx=(4, 0))

    # ── Rendering ────────────────────────────────────────────────────────────

    def _render(self):
        if not self.winfo_exists():
            return
        code = self._locale.code
        transactions = self._store.transactions_on(self._day)
        summary = self._store.summary_for(self._day)

        self._summary_values["income"].configure(
            text=f"+{format_currency(summary.income, code)}", text_color=KIND_COLORS[INCOME])
        self._summary_values["expense"].configure(
            text=f"-{format_currency(summary.expense, code)}", text_color=KIND_COLORS[EXPENSE])
        self._summary_values["total"].configure(
            text=format_signed(summary.total, code),
            text_color=KIND_COLORS[INCOME] if summary.total >= 0 else KIND_COLORS[EXPENSE])

        for w in self._scroll.winfo_children():
            w.destroy()

        if not transactions:
            ctk.CTkLabel(
                self._scroll, text=self._locale.t("calendar.noTransactions"), text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return

        for idx, tx in enumerate(transactions):
            if tx.id == self._editing_id:
                self._add_edit_row(idx, tx)
            else:
                self._add_row(idx, tx)

    def _add_row(self, idx: int, tx: Transaction):
        t = self._locale.t
        row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        row.grid(row=idx, column=0, sticky="ew", padx=4, pady=3)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text="▲" if tx.is_income else "▼", width=24,
            text_color=KIND_COLORS[tx.kind],
        ).grid(row=0, column=0, rowspan=2, padx=(10, 0))

        title = tx.description or f"{tx.category} {t('transactions.transaction')}"
        ctk.CTkLabel(
            row, text=title, anchor="w", font=ctk.CTkFont(size=13, weight="bold"),
        ).grid(row=0, column=1, padx=8, pady=(6, 0), sticky="w")
        ctk.CTkLabel(
            row, text=tx.category, anchor="w", text_color="gray60", font=ctk.CTkFont(size=11),
        ).grid(row=1, column=1, padx=8, pady=(0, 6), sticky="w")

        ctk.CTkLabel(
            row, text=format_signed(tx.signed_amount, self._locale.code),
            text_color=KIND_COLORS[tx.kind], font=ctk.CTkFont(size=13, weight="bold"),
        ).grid(row=0, column=2, rowspan=2, padx=4)

        btn_frame = ctk.CTkFrame(row, fg_color="transparent")
        btn_frame.grid(row=0, column=3, rowspan=2, padx=(4, 10), pady=6)
        ctk.CTkButton(
            btn_frame, text=t("common.edit"), width=60, height=26,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._start_edit(tx),
        ).pack(side="left", padx=(0, 4))
        ctk.CTkButton(
            btn_frame, text=t("common.delete"), width=65, height=26,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda: self._on_delete(tx),
        ).pack(side="left")

    def _add_edit_row(self, idx: int, tx: Transaction):
        t = self._locale.t
        row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        row.grid(row=idx, column=0, sticky="ew", padx=4, pady=3)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text=f"{t(KIND_LABEL_KEYS[tx.kind])} · {tx.category}",
            text_color=KIND_COLORS[tx.kind], anchor="w",
        ).grid(row=0, column=0, columnspan=2, padx=10, pady=(6, 2), sticky="w")

        ctk.CTkLabel(row, text=f"{t('common.amount')}:").grid(row=1, column=0, padx=(10, 4), sticky="e")
        amount_var = ctk.StringVar(value=str(tx.amount))
        ctk.CTkEntry(row, textvariable=amount_var).grid(row=1, column=1, padx=(0, 10), pady=2, sticky="ew")

        ctk.CTkLabel(row, text=f"{t('common.description')}:").grid(row=2, column=0, padx=(10, 4), sticky="e")
        desc_var = ctk.StringVar(value=tx.description or "")
        ctk.CTkEntry(row, textvariable=desc_var).grid(row=2, column=1, padx=(0, 10), pady=2, sticky="ew")

        error_var = ctk.StringVar()
        ctk.CTkLabel(row, textvariable=error_var, text_color="#F44336", anchor="w").grid(
            row=3, column=0, columnspan=2, padx=10, sticky="w")

        btn_frame = ctk.CTkFrame(row, fg_color="transparent")
        btn_frame.grid(row=4, column=0, columnspan=2, padx=10, pady=(2, 8), sticky="w")
        ctk.CTkButton(
            btn_frame, text=t("common.save"), width=80, height=26,
            command=lambda: self._save_edit(tx, amount_var.get(), desc_var.get(), error_var),
        ).pack(side="left", padx=(0, 4))
        ctk.CTkButton(
            btn_frame, text=t("common.cancel"), width=80, height=26,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._cancel_edit,
        ).pack(side="left")

    # ── Actions ──────────────────────────────────────────────────────────────

    def _add(self, kind: str):
        day = self._day
        self.destroy()
        self._on_add(kind, day)

    def _start_edit(self, tx: Transaction):
        self._editing_id = tx.id
        self._render()

    def _cancel_edit(self):
        self._editing_id = None
        self._render()

    def _save_edit(self, tx: Transaction, amount_text: str, description: str, error_var: ctk.StringVar):
        try:
            draft = self._tx_svc.edit_draft(tx, amount_text, description)
            self._store.update(tx, draft, on_done=self._on_updated, on_error=self._on_failed)
        except ValueError as e:
            error_var.set(self._locale.t(str(e)))
        except ApiError as e:
            self._on_failed(e)

    def _on_updated(self, _tx: Transaction):
        self._editing_id = None
        self._notify(self._locale.t("transactions.updateSuccess"), severity="success")
        self._render()

    def _on_delete(self, tx: Transaction):
        dlg = ConfirmDialog(
            self,
            self._locale,
            title=self._locale.t("transactions.deleteConfirmTitle"),
            message=self._locale.t("transactions.deleteConfirm"),
            detail=f"{format_signed(tx.signed_amount, self._locale.code)}  ·  {tx.category}",
        )
        if not dlg.result:
            return
        try:
            self._store.delete(tx.id, on_done=self._on_deleted, on_error=self._on_failed)
        except ApiError as e:
            self._on_failed(e)

    def _on_deleted(self, _tx_id: str):
        self._notify(self._locale.t("transactions.deleteSuccess"), severity="success")
        self._render()

    def _on_failed(self, exc: Exception):
        self._notify(
            self._locale.t("errors.unknownError"),
            error_message(self._locale, exc, "errors.unknownError"),
            severity="error",
        )
        self._render()
