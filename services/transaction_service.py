from datetime import date, tzinfo
from decimal import Decimal

from api.errors import ValidationFailure
from api.transaction_api import TransactionApi
from models.transaction import Transaction, TransactionDraft, parse_amount
from services.calendar_service import in_month
from utils.constants import TRANSACTION_KINDS
from utils.settings import settings


class TransactionService:
    def __init__(self, tx_api: TransactionApi, page_size: int | None = None):
        self._api = tx_api
        self._page_size = page_size or settings.transactions_page_size

    def get_all(self) -> list[Transaction]:
        """Walk every page the backend offers."""
        result: list[Transaction] = []
        page_num = 0
        while True:
            page = self._api.list(page_num, self._page_size)
            result.extend(page.content)
            if not page.has_next or not page.content:
                return result
            page_num += 1

    def get_for_month(self, reference: date, tz: tzinfo | None = None) -> list[Transaction]:
        """The list endpoint has no date filter; narrow by local month here."""
        return in_month(self.get_all(), reference, tz)

    def create(self, kind: str, draft: TransactionDraft) -> Transaction:
        return self._api.create(kind, draft)

    def update(self, original: Transaction, draft: TransactionDraft) -> Transaction:
        return self._api.update(original.id, original.kind, draft)

    def delete(self, tx_id: str) -> None:
        self._api.delete(tx_id)

    # ── Input validation ─────────────────────────────────────────────────────

    def new_draft(
        self,
        kind: str,
        amount_text: str,
        category_code: str,
        description: str = "",
        on_date: date | None = None,
        today: date | None = None,
    ) -> TransactionDraft:
        self._validate_kind(kind)
        amount = self._validate_amount(amount_text)
        if not category_code:
            raise ValidationFailure("transactions.categoryRequired")
        return TransactionDraft.for_new(
            amount, category_code, description, on_date, today or date.today()
        )

    def edit_draft(self, original: Transaction, amount_text: str, description: str = "") -> TransactionDraft:
        amount = self._validate_amount(amount_text)
        return TransactionDraft.for_update(original, amount, description)

    def _validate_kind(self, kind: str):
        if kind not in TRANSACTION_KINDS:
            raise ValidationFailure(f"Invalid type: {kind}")

    def _validate_amount(self, amount_text: str) -> Decimal:
        try:
            amount = parse_amount(amount_text)
        except ValueError as e:
            raise ValidationFailure("errors.amountInvalid") from e
        if amount <= 0:
            raise ValidationFailure("errors.amountPositive")
        return amount
