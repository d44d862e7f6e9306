import logging
from typing import Any, Callable

from api.errors import ApiError, AuthFailure

logger = logging.getLogger(__name__)


class Dispatcher:
    """Runs a backend call, then resumes with its outcome.

    The call (``work``) may run anywhere; the continuation (``on_success``
    or ``on_error``) always runs where ``_resume`` puts it, which is the only
    place application state may change. This base class runs both inline;
    ui.background.ThreadedDispatcher moves the call to a worker thread and
    resumes on the Tk main loop.

    An AuthFailure never reaches ``on_error``: it is routed to
    ``on_auth_failure`` (session teardown + redirect) for every call.
    """

    def __init__(self, on_auth_failure: Callable[[], None] | None = None):
        self._on_auth_failure = on_auth_failure

    def set_auth_failure_handler(self, handler: Callable[[], None]) -> None:
        self._on_auth_failure = handler

    def submit(
        self,
        work: Callable[[], Any],
        on_success: Callable[[Any], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        def run():
            try:
                result = work()
            except Exception as e:
                self._resume(lambda exc=e: self._fail(exc, on_error))
                return
            if on_success is not None:
                self._resume(lambda: on_success(result))

        self._spawn(run)

    def _spawn(self, fn: Callable[[], None]) -> None:
        fn()

    def _resume(self, fn: Callable[[], None]) -> None:
        fn()

    def _fail(self, exc: Exception, on_error: Callable[[Exception], None] | None) -> None:
        if isinstance(exc, AuthFailure):
            if self._on_auth_failure is not None:
                self._on_auth_failure()
            return
        if isinstance(exc, ApiError):
            logger.warning("Backend call failed", extra={"error": exc.message, "status": exc.status_code})
        else:
            logger.error("Unexpected error in backend call", exc_info=exc)
        if on_error is not None:
            on_error(exc)
