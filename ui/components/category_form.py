import customtkinter as ctk

from models.category import Category
from models.transaction import KIND_LABEL_KEYS
from services.category_service import CategoryService
from services.dispatcher import Dispatcher
from services.locale_service import Locale
from ui.messages import error_message
from utils.constants import INCOME, EXPENSE


class CategoryForm(ctk.CTkToplevel):
    """Create a category. The new record is left in .created once the backend accepts it."""

    def __init__(
        self,
        master,
        category_service: CategoryService,
        dispatcher: Dispatcher,
        locale: Locale,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self._svc = category_service
        self._dispatcher = dispatcher
        self._locale = locale
        self.created: Category | None = None

        t = locale.t
        self._kind_labels = {kind: t(KIND_LABEL_KEYS[kind]) for kind in (EXPENSE, INCOME)}

        self.title(t("categories.addCategoryTitle"))
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)

        r = 0

        # Code
        self._label(t("categories.categoryCode"), r, top=True)
        self._code_var = ctk.StringVar()
        ctk.CTkEntry(self, textvariable=self._code_var, width=240).grid(
            row=r, column=1, padx=(0, 16), pady=(16, 4), sticky="ew"
        )
        r += 1

        # Name
        self._label(t("categories.categoryName"), r)
        self._name_var = ctk.StringVar()
        ctk.CTkEntry(self, textvariable=self._name_var, width=240).grid(
            row=r, column=1, padx=(0, 16), pady=4, sticky="ew"
        )
        r += 1

        # Type
        self._label(t("categories.categoryType"), r)
        self._type_var = ctk.StringVar(value=self._kind_labels[EXPENSE])
        ctk.CTkComboBox(
            self, values=list(self._kind_labels.values()), variable=self._type_var,
            width=240, state="readonly",
        ).grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
        r += 1

        # Description
        self._label(f"{t('categories.categoryDescription')} ({t('common.optional')})", r)
        self._desc_box = ctk.CTkTextbox(self, width=240, height=70)
        self._desc_box.grid(row=r, column=1, padx=(0, 16), pady=4, sticky="ew")
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
        self._save_btn = ctk.CTkButton(btn_frame, text=t("common.create"), width=90, command=self._on_save)
        self._save_btn.pack(side="right")

        self.transient(master)
        self.grab_set()
        self._center()

    def _label(self, text, row, top=False):
        ctk.CTkLabel(self, text=f"{text}:").grid(
            row=row, column=0, padx=(16, 8), pady=(16, 4) if top else 4, sticky="e"
        )

    def _selected_kind(self) -> str:
        label = self._type_var.get()
        return next((k for k, v in self._kind_labels.items() if v == label), EXPENSE)

    def _on_save(self):
        code = self._code_var.get()
        name = self._name_var.get()
        kind = self._selected_kind()
        description = self._desc_box.get("1.0", "end").strip()
        try:
            self._svc.validate(code, name, kind, description)
        except ValueError as e:
            self._error_var.set(self._locale.t(str(e)))
            return

        self._error_var.set("")
        self._save_btn.configure(state="disabled", text=self._locale.t("common.loading"))
        self._dispatcher.submit(
            lambda: self._svc.create(code, name, kind, description),
            on_success=self._on_created,
            on_error=self._on_failed,
        )

    def _on_created(self, category: Category):
        self.created = category
        if self.winfo_exists():
            self.destroy()

    def _on_failed(self, exc: Exception):
        if not self.winfo_exists():
            return
        self._save_btn.configure(state="normal", text=self._locale.t("common.create"))
        self._error_var.set(error_message(self._locale, exc, "errors.unknownError"))

    def _center(self):
        self.update_idletasks()
        mw = self.master.winfo_x() + self.master.winfo_width() // 2
        mh = self.master.winfo_y() + self.master.winfo_height() // 2
        w, h = self.winfo_reqwidth(), self.winfo_reqheight()
        self.geometry(f"+{mw - w//2}+{mh - h//2}")
