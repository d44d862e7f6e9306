import logging
from datetime import date, tzinfo
from typing import Callable

from api.errors import NotFound
from models.calendar import DaySummary
from models.transaction import Transaction, TransactionDraft
from services.calendar_service import summarize_day, transactions_on
from services.dispatcher import Dispatcher
from services.transaction_service import TransactionService
from utils.date_helpers import first_of_month

logger = logging.getLogger(__name__)


class TransactionStore:
    """Transactions of the month on screen.

    Every mutation goes to the backend first; the local list changes only
    in the dispatcher's continuation, after the backend has confirmed, so a
    failure leaves it untouched. Responses are applied in arrival order.
    """

    def __init__(
        self,
        tx_service: TransactionService,
        dispatcher: Dispatcher,
        tz: tzinfo | None = None,
    ):
        self._svc = tx_service
        self._dispatcher = dispatcher
        self._tz = tz
        self._month: date | None = None
        self._items: list[Transaction] = []
        self._load_gen = 0
        self._listeners: list[Callable[[], None]] = []

    @property
    def month(self) -> date | None:
        return self._month

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._items)

    def get(self, tx_id: str) -> Transaction | None:
        return next((t for t in self._items if t.id == tx_id), None)

    def on_change(self, listener: Callable[[], None]) -> None:
        self._listeners.append(listener)

    # ── Queries ──────────────────────────────────────────────────────────────

    def transactions_on(self, day: date) -> list[Transaction]:
        return transactions_on(self._items, day, self._tz)

    def summary_for(self, day: date) -> DaySummary:
        return summarize_day(self.transactions_on(day))

    # ── Backend-confirmed mutations ──────────────────────────────────────────

    def load_month(
        self,
        reference: date,
        on_loaded: Callable[[list[Transaction]], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        """Replace the contents with the month containing reference.

        Only the latest request counts; an older response arriving late is
        dropped.
        """
        self._load_gen += 1
        gen = self._load_gen
        month = first_of_month(reference)

        def loaded(items: list[Transaction]):
            if gen != self._load_gen:
                return
            self._month = month
            self._items = list(items)
            logger.info("Month loaded", extra={"month": month.isoformat(), "count": len(items)})
            self._changed()
            if on_loaded:
                on_loaded(self.transactions)

        self._dispatcher.submit(
            lambda: self._svc.get_for_month(month, self._tz),
            on_success=loaded,
            on_error=on_error,
        )

    def create(
        self,
        kind: str,
        draft: TransactionDraft,
        on_done: Callable[[Transaction], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        def created(tx: Transaction):
            self._items.append(tx)
            self._changed()
            if on_done:
                on_done(tx)

        self._dispatcher.submit(lambda: self._svc.create(kind, draft), on_success=created, on_error=on_error)

    def update(
        self,
        original: Transaction,
        draft: TransactionDraft,
        on_done: Callable[[Transaction], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        """Kind never changes on update; the stored entry keeps the original's.

        Raises:
            NotFound: if original is not in the store
        """
        self._require(original.id)

        def updated(tx: Transaction):
            tx = tx.with_kind(original.kind)
            for idx, existing in enumerate(self._items):
                if existing.id == tx.id:
                    self._items[idx] = tx
                    break
            else:
                logger.info("Updated transaction no longer in store", extra={"tx_id": tx.id})
            self._changed()
            if on_done:
                on_done(tx)

        self._dispatcher.submit(lambda: self._svc.update(original, draft), on_success=updated, on_error=on_error)

    def delete(
        self,
        tx_id: str,
        on_done: Callable[[str], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> None:
        """
        Raises:
            NotFound: if tx_id is not in the store; nothing is sent
        """
        self._require(tx_id)

        def deleted(_):
            self._items = [t for t in self._items if t.id != tx_id]
            self._changed()
            if on_done:
                on_done(tx_id)

        self._dispatcher.submit(lambda: self._svc.delete(tx_id), on_success=deleted, on_error=on_error)

    def clear(self) -> None:
        """Drop everything, e.g. on logout."""
        self._load_gen += 1
        self._month = None
        self._items = []
        self._changed()

    def _require(self, tx_id: str) -> None:
        if self.get(tx_id) is None:
            raise NotFound(f"Transaction {tx_id} not found")

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()
