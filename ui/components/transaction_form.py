from datetime import date

import customtkinter as ctk

from models.category import Category
from models.transaction import KIND_LABEL_KEYS, Transaction
from services.category_service import CategoryService
from services.dispatcher import Dispatcher
from services.locale_service import Locale
from services.transaction_service import TransactionService
from services.transaction_store import TransactionStore
from ui.components.date_picker import DatePickerWidget
from ui.messages import error_message
from utils.constants import INCOME, KIND_COLORS


class TransactionForm(ctk.CTkToplevel):
    """Add an income or an expense.

    The kind is fixed by the button that opened the form and decides which
    backend endpoint is used. The created record is left in .created.
    """

    def __init__(
        self,
        master,
        kind: str,
        store: TransactionStore,
        tx_service: TransactionService,
        category_service: CategoryService,
        dispatcher: Dispatcher,
        locale: Locale,
        selected_date: date | None = None,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._kind = kind
        self._store = store
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._dispatcher = dispatcher
        self._locale = locale
        self._categories: list[Category] = []
        self.created: Transaction | None = None

        t = locale.t
        is_income = kind == INCOME
        self.title(t("transactions.addIncomeTitle") if is_income else t("transactions.addExpenseTitle"))
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0

        ctk.CTkLabel(
            self, text=t(KIND_LABEL_KEYS[kind]),
            text_color=KIND_COLORS[kind],
            font=ctk.CTkFont(size=14, weight="bold"),
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(16, 4), sticky="w")
        r += 1

        # Amount
        self._label(t("common.amount"), r)
        self._amount_var = ctk.StringVar()
        amount_entry = ctk.CTkEntry(self, textvariable=self._amount_var, width=220)
        amount_entry.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Category
        self._label(t("common.category"), r)
        self._cat_var = ctk.StringVar(value=t("common.loading"))
        self._cat_combo = ctk.CTkComboBox(
            self, values=[], variable=self._cat_var, width=220, state="disabled",
        )
        self._cat_combo.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Date
        self._label(t("common.date"), r)
        self._date_picker = DatePickerWidget(
            self, locale=locale.code, initial_date=selected_date or date.today(),
        )
        self._date_picker.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="w")
        r += 1

        # Description
        self._label(f"{t('common.description')} ({t('common.optional')})", r)
        self._desc_var = ctk.StringVar()
        ctk.CTkEntry(
            self, textvariable=self._desc_var, width=220,
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Error
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=320, anchor="w",
        ).grid(row=r, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        r += 1

        # Buttons
        btn_frame = ctk.CTkFrame(self, fg_color="transparent")
        btn_frame.grid(row=r, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            btn_frame, text=t("common.cancel"), width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        self._save_btn = ctk.CTkButton(btn_frame, text=t("common.add"), width=90, command=self._on_save)
        self._save_btn.pack(side="right")

        self.transient(master)
        self.grab_set()
        self._center()
        amount_entry.focus_set()

        self._load_categories()

    def _label(self, text, row):
        ctk.CTkLabel(self, text=f"{text}:").grid(
            row=row, column=0, padx=(16, 8), pady=4, sticky="e"
        )

    # ── Categories ───────────────────────────────────────────────────────────

    def _load_categories(self):
        self._dispatcher.submit(
            lambda: self._cat_svc.get_for_kind(self._kind),
            on_success=self._on_categories,
            on_error=self._on_categories_failed,
        )

    def _on_categories(self, categories: list[Category]):
        if not self.winfo_exists():
            return
        self._categories = categories
        if not categories:
            self._cat_var.set(self._locale.t("transactions.noCategories"))
            return
        labels = [self._category_label(c) for c in categories]
        self._cat_combo.configure(values=labels, state="readonly")
        self._cat_var.set(self._locale.t("transactions.selectCategory"))

    def _on_categories_failed(self, exc: Exception):
        if not self.winfo_exists():
            return
        self._cat_var.set("")
        self._error_var.set(error_message(self._locale, exc, "transactions.loadCategoriesError"))

    def _category_label(self, cat: Category) -> str:
        return f"{cat.name} ({cat.code})"

    def _selected_code(self) -> str:
        label = self._cat_var.get()
        match = next((c for c in self._categories if self._category_label(c) == label), None)
        return match.code if match else ""

    # ── Submit ───────────────────────────────────────────────────────────────

    def _on_save(self):
        if not self._date_picker.is_valid():
            self._error_var.set(self._locale.t("errors.dateInvalid"))
            return
        try:
            draft = self._tx_svc.new_draft(
                kind=self._kind,
                amount_text=self._amount_var.get(),
                category_code=self._selected_code(),
                description=self._desc_var.get(),
                on_date=self._date_picker.get(),
            )
        except ValueError as e:
            self._error_var.set(self._locale.t(str(e)))
            return

        self._error_var.set("")
        self._save_btn.configure(state="disabled", text=self._locale.t("common.loading"))
        self._store.create(self._kind, draft, on_done=self._on_created, on_error=self._on_failed)

    def _on_created(self, tx: Transaction):
        self.created = tx
        if self.winfo_exists():
            self.destroy()

    def _on_failed(self, exc: Exception):
        if not self.winfo_exists():
            return
        self._save_btn.configure(state="normal", text=self._locale.t("common.add"))
        self._error_var.set(error_message(self._locale, exc, "errors.unknownError"))

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
