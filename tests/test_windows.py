import tkinter as tk

from ui.windows import close_dialogs


class FakeDialog(tk.Toplevel):
    def __init__(self):
        self.destroyed = False

    def destroy(self):
        self.destroyed = True


class FakeFrame:
    def __init__(self):
        self.destroyed = False

    def destroy(self):
        self.destroyed = True


class FakeRoot:
    def __init__(self, children):
        self._children = children

    def winfo_children(self):
        return list(self._children)


def test_open_dialogs_are_closed_and_frames_kept():
    form, day_dialog, content = FakeDialog(), FakeDialog(), FakeFrame()

    closed = close_dialogs(FakeRoot([content, form, day_dialog]))

    assert closed == 2
    assert form.destroyed and day_dialog.destroyed
    assert not content.destroyed


def test_nothing_open_is_a_no_op():
    assert close_dialogs(FakeRoot([FakeFrame()])) == 0
