import customtkinter as ctk
from tkcalendar import Calendar
import tkinter as tk
from tkinter import ttk
from datetime import date

from utils.date_helpers import parse_date, format_date, format_date_for_locale, icu_locale


class DatePickerWidget(ctk.CTkFrame):
    """Date entry (YYYY-MM-DD) + localized calendar popup + readable caption.

    .get() returns a date or None when the entry is empty/invalid.
    """

    def __init__(self, master, locale: str, initial_date: date | None = None, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)

        self._locale = locale
        self._popup: ctk.CTkToplevel | None = None
        self._var = tk.StringVar(value=format_date(initial_date) if initial_date else "")

        self._entry = ctk.CTkEntry(self, textvariable=self._var, width=110)
        self._entry.grid(row=0, column=0, sticky="ew")
        self._entry.bind("<FocusOut>", self._on_focus_out)
        self._entry.bind("<Return>", self._on_focus_out)

        self._btn = ctk.CTkButton(self, text="📅", width=32, command=self._open_popup)
        self._btn.grid(row=0, column=1, padx=(4, 0))

        self._caption = ctk.CTkLabel(self, text="", text_color="gray60", anchor="w")
        self._caption.grid(row=1, column=0, columnspan=2, sticky="w")
        self._update_caption()

    def get(self) -> date | None:
        return parse_date(self._var.get().strip())

    def set(self, value: date | None):
        self._var.set(format_date(value) if value else "")
        self._reset_border()
        self._update_caption()

    def is_valid(self) -> bool:
        return self.get() is not None

    def _on_focus_out(self, _event=None):
        raw = self._var.get().strip()
        if not raw:
            self._reset_border()
        elif parse_date(raw):
            self._var.set(format_date(parse_date(raw)))
            self._reset_border()
        else:
            self._entry.configure(border_color="#F44336")
        self._update_caption()

    def _reset_border(self):
        self._entry.configure(border_color=("gray65", "gray35"))

    def _update_caption(self):
        d = self.get()
        self._caption.configure(text=format_date_for_locale(d, self._locale, fmt="full") if d else "")

    def _open_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._popup.destroy()
            self._popup = None
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        # Theme the calendar to match CTk appearance
        mode = ctk.get_appearance_mode()
        style = ttk.Style(popup)
        if mode == "Dark":
            bg, fg = "#2b2b2b", "#ffffff"
        else:
            bg, fg = "#ffffff", "#000000"
        style.theme_use("default")
        style.configure("Calendar.Treeview", background=bg, foreground=fg, fieldbackground=bg)

        current = self.get() or date.today()

        # Sunday-first like the month grid; month and day names follow the UI language
        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year,
            month=current.month,
            day=current.day,
            date_pattern="yyyy-mm-dd",
            locale=icu_locale(self._locale),
            firstweekday="sunday",
            showweeknumbers=False,
            background=bg,
            foreground=fg,
            headersbackground=bg,
            headersforeground=fg,
            selectbackground="#1f6aa5",
            weekendbackground=bg,
            weekendforeground=fg,
            othermonthforeground="gray60",
            bordercolor=bg,
        )
        cal.pack(padx=4, pady=4)
        cal.bind("<<CalendarSelected>>", lambda e: self._on_date_selected(cal, popup))

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")

        popup.bind("<FocusOut>", lambda e: self._maybe_close(popup))

    def _on_date_selected(self, cal, popup):
        self.set(parse_date(cal.get_date()))
        popup.destroy()
        self._popup = None

    def _maybe_close(self, popup):
        if not popup.winfo_exists():
            return
        focused = popup.focus_get()
        if focused is None or not str(focused).startswith(str(popup)):
            popup.destroy()
            self._popup = None
