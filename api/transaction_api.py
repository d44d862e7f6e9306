from urllib.parse import quote

from api.errors import NetworkFailure
from api.http_client import ApiClient
from models.page import Page
from models.transaction import Transaction, TransactionDraft
from utils.constants import INCOME, EXPENSE

_CREATE_PATHS = {
    INCOME: "/transactions/income",
    EXPENSE: "/transactions/expense",
}


class TransactionApi:
    def __init__(self, client: ApiClient):
        self._client = client

    def list(self, page: int = 0, size: int = 100) -> Page[Transaction]:
        data = self._client.get("/transactions", params={"page": page, "size": size})
        return self._parse(lambda: Page.from_payload(data, Transaction.from_payload, page=page))

    def create(self, kind: str, draft: TransactionDraft) -> Transaction:
        """POST to the income or expense endpoint; the kind is implied by the path."""
        path = _CREATE_PATHS.get(kind)
        if path is None:
            raise ValueError(f"Invalid kind: {kind}")
        data = self._client.post(path, json=draft.to_payload())
        return self._parse(lambda: Transaction.from_payload(data, kind=kind))

    def update(self, tx_id: str, kind: str, draft: TransactionDraft) -> Transaction:
        """PUT the new values; the response omits the kind, so it is re-attached."""
        data = self._client.put(f"/transactions/{quote(tx_id, safe='')}", json=draft.to_payload())
        return self._parse(lambda: Transaction.from_payload(data, kind=kind))

    def delete(self, tx_id: str) -> None:
        self._client.delete(f"/transactions/{quote(tx_id, safe='')}")

    def _parse(self, build):
        try:
            return build()
        except (KeyError, ValueError, TypeError) as e:
            raise NetworkFailure(f"Invalid transaction data from backend: {e}") from e
