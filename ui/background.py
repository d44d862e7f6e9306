import threading

from services.dispatcher import Dispatcher


class ThreadedDispatcher(Dispatcher):
    """Backend calls on a daemon thread, continuations on the Tk main loop."""

    def __init__(self, root, on_auth_failure=None):
        super().__init__(on_auth_failure)
        self._root = root

    def _spawn(self, fn):
        threading.Thread(target=fn, daemon=True).start()

    def _resume(self, fn):
        self._root.after(0, fn)
