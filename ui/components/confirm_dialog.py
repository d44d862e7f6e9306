import customtkinter as ctk

from services.locale_service import Locale


class ConfirmDialog(ctk.CTkToplevel):
    """Asks before a delete. Blocks until answered; the answer is in ``.result``.

    ``detail`` names the record about to go (a category, or an amount and
    its category). Escape or closing the window counts as cancel.
    """

    def __init__(self, master, locale: Locale, title: str, message: str, detail: str = "", **kwargs):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        row = 0
        if detail:
            ctk.CTkLabel(
                self, text=detail, wraplength=360, anchor="w",
                font=ctk.CTkFont(size=13, weight="bold"),
            ).grid(row=row, column=0, sticky="ew", padx=20, pady=(16, 0))
            row += 1

        ctk.CTkLabel(
            self, text=message, wraplength=360, justify="left", anchor="w", text_color="gray60",
        ).grid(row=row, column=0, sticky="ew", padx=20, pady=(8 if detail else 16, 16))
        row += 1

        actions = ctk.CTkFrame(self, fg_color="transparent")
        actions.grid(row=row, column=0, pady=(0, 16), padx=20, sticky="e")
        ctk.CTkButton(
            actions, text=locale.t("common.cancel"), width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=lambda: self._close(False),
        ).pack(side="left", padx=(0, 8))
        ctk.CTkButton(
            actions, text=locale.t("common.delete"), width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda: self._close(True),
        ).pack(side="left")

        self.bind("<Escape>", lambda _e: self._close(False))
        self.bind("<Return>", lambda _e: self._close(True))
        self.protocol("WM_DELETE_WINDOW", lambda: self._close(False))

        self.transient(master)
        self.grab_set()
        self._place_over(master)
        self.wait_window()

    def _place_over(self, master):
        self.update_idletasks()
        cx = master.winfo_rootx() + master.winfo_width() // 2
        cy = master.winfo_rooty() + master.winfo_height() // 3
        self.geometry(f"+{cx - self.winfo_width() // 2}+{max(cy - self.winfo_height() // 2, 0)}")

    def _close(self, confirmed: bool):
        self.result = confirmed
        self.destroy()
