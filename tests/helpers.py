from decimal import Decimal

from models.transaction import Transaction
from services.dispatcher import Dispatcher
from utils.constants import INCOME


def make_tx(tx_id="1", amount="100", kind=INCOME, occurred_at="2024-02-15T10:00:00Z",
            category="salary", description=None) -> Transaction:
    return Transaction(
        id=tx_id,
        amount=Decimal(amount),
        category=category,
        kind=kind,
        occurred_at=occurred_at,
        description=description,
    )


class QueuedDispatcher(Dispatcher):
    """Runs calls inline but holds continuations until run_pending()."""

    def __init__(self, on_auth_failure=None):
        super().__init__(on_auth_failure)
        self.pending = []

    def _resume(self, fn):
        self.pending.append(fn)

    def run_pending(self, order=None):
        pending, self.pending = self.pending, []
        for idx in order or range(len(pending)):
            pending[idx]()
