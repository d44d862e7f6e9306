import tkinter as tk


def close_dialogs(root) -> int:
    """Destroy every top-level dialog still open over ``root``.

    Nested dialogs go with their parent. Returns how many were closed.
    """
    dialogs = [w for w in root.winfo_children() if isinstance(w, tk.Toplevel)]
    for dialog in dialogs:
        dialog.destroy()
    return len(dialogs)
