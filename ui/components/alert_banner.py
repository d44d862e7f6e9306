import customtkinter as ctk

from utils.constants import SEVERITY_COLORS, TOAST_DURATION_MS


class AlertBanner(ctk.CTkFrame):
    """A dismissible colored banner for transient notifications (title + message)."""

    def __init__(self, master, title: str, message: str = "", severity: str = "info",
                 duration_ms: int | None = TOAST_DURATION_MS, **kwargs):
        color = SEVERITY_COLORS.get(severity, SEVERITY_COLORS["info"])
        super().__init__(master, fg_color=color, corner_radius=6, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=title, text_color="white",
            font=ctk.CTkFont(size=13, weight="bold"),
            anchor="w", padx=10,
        ).grid(row=0, column=0, sticky="ew", pady=(6, 0 if message else 6))

        if message and message != title:
            ctk.CTkLabel(
                self, text=message, text_color="white",
                anchor="w", justify="left", wraplength=600, padx=10,
            ).grid(row=1, column=0, sticky="ew", pady=(0, 6))

        ctk.CTkButton(
            self, text="✕", width=28, height=24,
            fg_color="transparent",
            hover_color="#ffffff",
            text_color="white",
            command=self.destroy,
        ).grid(row=0, column=1, rowspan=2, padx=(0, 4))

        if duration_ms:
            self.after(duration_ms, self._expire)

    def _expire(self):
        if self.winfo_exists():
            self.destroy()
