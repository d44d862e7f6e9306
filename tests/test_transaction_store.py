from datetime import date, timezone
from decimal import Decimal

import pytest

from api.errors import ApiError, NotFound
from models.transaction import TransactionDraft
from services.transaction_store import TransactionStore
from utils.constants import INCOME, EXPENSE
from tests.helpers import QueuedDispatcher, make_tx


@pytest.fixture
def february(backend):
    backend.add_transaction("1", 100, INCOME, "2024-02-15T10:00:00Z", "salary")
    backend.add_transaction("2", 40, EXPENSE, "2024-02-15T18:00:00Z", "food")
    backend.add_transaction("3", 15, EXPENSE, "2024-02-20T08:00:00Z", "taxi")
    backend.add_transaction("4", 999, INCOME, "2024-03-01T09:00:00Z", "salary")
    return backend


def test_load_month_keeps_only_that_month(store, february):
    loaded = []
    store.load_month(date(2024, 2, 15), on_loaded=loaded.append)

    assert store.month == date(2024, 2, 1)
    assert [t.id for t in store.transactions] == ["1", "2", "3"]
    assert len(loaded) == 1
    # page_size=2 in the fixture: two list requests for four records
    assert sum(r.url.path == "/transactions" for r in february.requests) == 2


def test_day_summary_from_store(store, february):
    store.load_month(date(2024, 2, 1))
    summary = store.summary_for(date(2024, 2, 15))
    assert summary.income == Decimal(100)
    assert summary.expense == Decimal(40)
    assert summary.total == Decimal(60)
    assert summary.count == 2


def test_create_then_transactions_on_includes_it(store, tx_service, backend):
    store.load_month(date(2024, 2, 1))
    draft = tx_service.new_draft(INCOME, "250", "salary", "bonus",
                                 on_date=date(2024, 2, 10), today=date(2024, 2, 15))
    created = []
    store.create(INCOME, draft, on_done=created.append)

    assert len(created) == 1
    tx = created[0]
    assert tx.kind == INCOME
    assert store.transactions_on(date(2024, 2, 10)) == [tx]
    assert backend.requests[-1].url.path == "/transactions/income"


def test_expense_goes_to_expense_endpoint(store, tx_service, backend):
    draft = tx_service.new_draft(EXPENSE, "12.50", "food", today=date(2024, 2, 15))
    store.create(EXPENSE, draft)

    assert backend.requests[-1].url.path == "/transactions/expense"
    assert store.transactions[0].kind == EXPENSE
    assert store.transactions[0].amount == Decimal("12.5")


def test_amount_only_update_keeps_income_kind(store, tx_service, february):
    store.load_month(date(2024, 2, 1))
    original = store.get("1")
    draft = tx_service.edit_draft(original, "150", "")
    updated = []
    store.update(original, draft, on_done=updated.append)

    assert updated[0].kind == INCOME
    assert store.get("1").kind == INCOME
    assert store.get("1").amount == Decimal(150)
    assert store.get("1").occurred_at == original.occurred_at


def test_update_of_absent_id_raises(store, tx_service, backend):
    ghost = make_tx("nope")
    draft = tx_service.edit_draft(ghost, "10")
    with pytest.raises(NotFound):
        store.update(ghost, draft)
    assert backend.requests == []


def test_delete_removes(store, february):
    store.load_month(date(2024, 2, 1))
    deleted = []
    store.delete("2", on_done=deleted.append)

    assert deleted == ["2"]
    assert store.get("2") is None
    assert [t.id for t in store.transactions] == ["1", "3"]


def test_delete_of_absent_id_is_not_found_and_changes_nothing(store, february):
    store.load_month(date(2024, 2, 1))
    before = store.transactions
    sent = len(february.requests)

    with pytest.raises(NotFound):
        store.delete("missing")

    assert store.transactions == before
    assert len(february.requests) == sent


def test_create_then_delete_restores_contents(store, tx_service, february):
    store.load_month(date(2024, 2, 1))
    before = store.transactions
    draft = tx_service.new_draft(EXPENSE, "5", "food", today=date(2024, 2, 15))
    created = []
    store.create(EXPENSE, draft, on_done=created.append)
    store.delete(created[0].id)

    assert store.transactions == before


def test_failed_delete_leaves_store_unchanged(store, february):
    store.load_month(date(2024, 2, 1))
    before = store.transactions
    february.fail[("DELETE", "/transactions/1")] = (500, {"message": "boom"})
    errors = []
    store.delete("1", on_error=errors.append)

    assert store.transactions == before
    assert isinstance(errors[0], ApiError)
    assert errors[0].message == "boom"


def test_failed_create_leaves_store_unchanged(store, tx_service, february):
    store.load_month(date(2024, 2, 1))
    before = store.transactions
    february.fail[("POST", "/transactions/income")] = (422, {"message": "Category not found"})
    errors = []
    draft = tx_service.new_draft(INCOME, "5", "nope", today=date(2024, 2, 15))
    store.create(INCOME, draft, on_error=errors.append)

    assert store.transactions == before
    assert errors[0].message == "Category not found"


def test_unauthorized_goes_to_auth_handler_not_caller(store, february, auth_failures):
    february.fail[("GET", "/transactions")] = (401, {"message": "expired"})
    errors = []
    store.load_month(date(2024, 2, 1), on_error=errors.append)

    assert auth_failures == [True]
    assert errors == []
    assert store.transactions == ()


def test_listeners_hear_every_change(store, february):
    calls = []
    store.on_change(lambda: calls.append(True))
    store.load_month(date(2024, 2, 1))
    store.delete("3")
    store.clear()
    assert len(calls) == 3


def test_late_response_for_previous_month_is_dropped(tx_service, february):
    dispatcher = QueuedDispatcher()
    store = TransactionStore(tx_service, dispatcher, tz=timezone.utc)
    store.load_month(date(2024, 2, 1))
    store.load_month(date(2024, 3, 1))

    # March answers first, February straggles in afterwards
    dispatcher.run_pending(order=[1, 0])

    assert store.month == date(2024, 3, 1)
    assert [t.id for t in store.transactions] == ["4"]


def test_nothing_changes_before_backend_confirms(tx_service, february):
    dispatcher = QueuedDispatcher()
    store = TransactionStore(tx_service, dispatcher, tz=timezone.utc)
    store.load_month(date(2024, 2, 1))
    dispatcher.run_pending()

    store.delete("1")
    assert store.get("1") is not None
    dispatcher.run_pending()
    assert store.get("1") is None


def test_draft_for_today_leaves_date_to_server(tx_service):
    draft = tx_service.new_draft(INCOME, "1", "salary", on_date=date(2024, 2, 15), today=date(2024, 2, 15))
    assert isinstance(draft, TransactionDraft)
    assert "date" not in draft.to_payload()


def test_malformed_row_does_not_sink_the_month(store, backend):
    backend.add_transaction("1", 60, INCOME, "2024-02-10T12:00:00Z", "salary")
    backend.add_transaction("2", 5, INCOME, "15.02.2024 10:00", "salary")
    errors = []

    store.load_month(date(2024, 2, 1), on_error=errors.append)

    assert errors == []
    assert [t.id for t in store.transactions] == ["1"]
