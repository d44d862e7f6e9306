from typing import Callable

import customtkinter as ctk

from models.category import Category
from models.page import Page
from models.transaction import KIND_LABEL_KEYS
from services.category_service import CategoryService
from services.dispatcher import Dispatcher
from services.locale_service import Locale
from ui.components.category_form import CategoryForm
from ui.components.confirm_dialog import ConfirmDialog
from ui.messages import error_message
from utils.constants import KIND_COLORS


class CategoriesTab(ctk.CTkFrame):
    """Paged category list. More pages are appended while the backend reports one."""

    def __init__(
        self,
        master,
        category_service: CategoryService,
        dispatcher: Dispatcher,
        locale: Locale,
        notify: Callable[..., None],
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = category_service
        self._dispatcher = dispatcher
        self._locale = locale
        self._notify = notify
        self._categories: list[Category] = []
        self._page = 0
        self._has_next = False
        self._loading = False
        self._load_gen = 0

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_toolbar()
        self._build_list()
        self._load()

    def refresh(self):
        self._load()

    def _build_toolbar(self):
        t = self._locale.t
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        title = ctk.CTkFrame(bar, fg_color="transparent")
        title.pack(side="left", padx=(12, 16), pady=6)
        ctk.CTkLabel(
            title, text=t("categories.title"),
            font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).pack(anchor="w")
        ctk.CTkLabel(
            title, text=t("categories.description"),
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).pack(anchor="w")

        ctk.CTkButton(
            bar, text=f"+ {t('categories.addCategory')}", command=self._open_add,
        ).pack(side="right", padx=12, pady=6)

    def _build_list(self):
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)

    # ── Loading ──────────────────────────────────────────────────────────────

    def _load(self):
        """Start over from the first page."""
        self._load_gen += 1
        self._categories = []
        self._page = 0
        self._has_next = False
        self._fetch(0)

    def _load_more(self):
        if self._has_next and not self._loading:
            self._fetch(self._page + 1)

    def _fetch(self, page: int):
        gen = self._load_gen
        self._loading = True
        self._render()
        self._dispatcher.submit(
            lambda: self._svc.get_page(page),
            on_success=lambda result: self._on_page(gen, result),
            on_error=lambda exc: self._on_load_failed(gen, exc),
        )

    def _on_page(self, gen: int, result: Page[Category]):
        if gen != self._load_gen or not self.winfo_exists():
            return
        self._loading = False
        self._categories.extend(result.content)
        self._page = result.page
        self._has_next = result.has_next
        self._render()

    def _on_load_failed(self, gen: int, exc: Exception):
        if gen != self._load_gen or not self.winfo_exists():
            return
        self._loading = False
        self._render()
        self._notify(
            self._locale.t("categories.loadError"),
            error_message(self._locale, exc, "auth.tryAgain"),
            severity="error",
        )

    # ── Rendering ────────────────────────────────────────────────────────────

    def _render(self):
        t = self._locale.t
        for w in self._scroll.winfo_children():
            w.destroy()

        if not self._categories:
            text = t("common.loading") if self._loading else t("categories.empty")
            ctk.CTkLabel(self._scroll, text=text, text_color="gray60").grid(row=0, column=0, pady=40)
            return

        # Column headers
        hdr = ctk.CTkFrame(self._scroll, fg_color="transparent")
        hdr.grid(row=0, column=0, sticky="ew", padx=4, pady=(0, 2))
        hdr.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(hdr, text=t("common.code"), width=110, anchor="w", text_color="gray60",
                     font=ctk.CTkFont(size=11)).grid(row=0, column=0, padx=(10, 0))
        ctk.CTkLabel(hdr, text=t("common.name"), anchor="w", text_color="gray60",
                     font=ctk.CTkFont(size=11)).grid(row=0, column=1, padx=8, sticky="w")
        ctk.CTkLabel(hdr, text=t("categories.categoryType"), width=80, anchor="center", text_color="gray60",
                     font=ctk.CTkFont(size=11)).grid(row=0, column=2)
        ctk.CTkLabel(hdr, text="", width=75).grid(row=0, column=3)  # button placeholder

        for idx, cat in enumerate(self._categories):
            self._add_row(idx + 1, cat)

        if self._has_next:
            ctk.CTkButton(
                self._scroll,
                text=t("common.loading") if self._loading else t("categories.loadMore"),
                state="disabled" if self._loading else "normal",
                fg_color="transparent", border_width=1,
                text_color=("gray10", "gray90"),
                command=self._load_more,
            ).grid(row=len(self._categories) + 1, column=0, pady=8)

    def _add_row(self, idx: int, cat: Category):
        t = self._locale.t
        row = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        row.grid(row=idx, column=0, sticky="ew", padx=4, pady=3)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(
            row, text=cat.code, width=110, anchor="w",
            text_color="gray60", font=ctk.CTkFont(family="Courier", size=12),
        ).grid(row=0, column=0, padx=(10, 0), pady=8)

        # Name + optional description
        name_frame = ctk.CTkFrame(row, fg_color="transparent")
        name_frame.grid(row=0, column=1, padx=8, sticky="w")
        ctk.CTkLabel(
            name_frame, text=cat.name,
            font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
        ).pack(anchor="w")
        if cat.description:
            ctk.CTkLabel(
                name_frame, text=cat.description,
                text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
            ).pack(anchor="w")

        # Type badge
        ctk.CTkLabel(
            row, text=t(KIND_LABEL_KEYS.get(cat.kind, cat.kind)),
            width=80, anchor="center",
            text_color=KIND_COLORS.get(cat.kind, "#888888"),
            font=ctk.CTkFont(size=11, weight="bold"),
        ).grid(row=0, column=2, padx=4)

        ctk.CTkButton(
            row, text=t("common.delete"), width=65, height=26,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda c=cat: self._on_delete(c),
        ).grid(row=0, column=3, padx=(4, 10), pady=6)

    # ── Actions ──────────────────────────────────────────────────────────────

    def _open_add(self):
        form = CategoryForm(self.winfo_toplevel(), self._svc, self._dispatcher, self._locale)
        self.wait_window(form)
        if form.created:
            self._categories.insert(0, form.created)
            self._render()
            self._notify(self._locale.t("categories.createSuccess"), severity="success")

    def _on_delete(self, cat: Category):
        dlg = ConfirmDialog(
            self.winfo_toplevel(),
            self._locale,
            title=self._locale.t("categories.deleteConfirmTitle"),
            message=self._locale.t("categories.deleteConfirm"),
            detail=f"{cat.name} ({cat.code})",
        )
        if not dlg.result:
            return
        self._dispatcher.submit(
            lambda: self._svc.delete(cat.code),
            on_success=lambda _: self._on_deleted(cat),
            on_error=self._on_delete_failed,
        )

    def _on_deleted(self, cat: Category):
        self._categories = [c for c in self._categories if c.code != cat.code]
        if self.winfo_exists():
            self._render()
        self._notify(self._locale.t("categories.deleteSuccess"), severity="success")

    def _on_delete_failed(self, exc: Exception):
        self._notify(
            self._locale.t("errors.unknownError"),
            error_message(self._locale, exc, "auth.tryAgain"),
            severity="error",
        )
