import json

import pytest

from api.errors import NetworkFailure, ValidationFailure
from utils.constants import INCOME, EXPENSE


@pytest.fixture
def seeded(backend):
    backend.add_category("salary", "Salary", INCOME)
    backend.add_category("food", "Food", EXPENSE, "Groceries and eating out")
    backend.add_category("taxi", "Taxi", EXPENSE)
    return backend


def test_pages_follow_has_next(category_service, seeded):
    first = category_service.get_page(0)
    assert [c.code for c in first.content] == ["salary", "food"]
    assert first.has_next

    second = category_service.get_page(1)
    assert [c.code for c in second.content] == ["taxi"]
    assert not second.has_next
    assert second.page == 1

    params = seeded.requests[-1].url.params
    assert params["page"] == "1"
    assert params["size"] == "2"


def test_picker_filters_by_kind(category_service, seeded):
    expenses = category_service.get_for_kind(EXPENSE)
    assert [c.code for c in expenses] == ["food", "taxi"]
    assert seeded.requests[-1].url.params["size"] == "100"


def test_create_posts_trimmed_payload(category_service, backend):
    created = category_service.create(" gifts ", " Gifts ", INCOME, "")
    assert created.code == "gifts"
    assert created.kind == INCOME
    assert json.loads(backend.requests[-1].content) == {"code": "gifts", "name": "Gifts", "type": INCOME}


@pytest.mark.parametrize("code, name, kind, key", [
    ("", "Food", EXPENSE, "categories.codeRequired"),
    ("   ", "Food", EXPENSE, "categories.codeRequired"),
    ("food", "", EXPENSE, "categories.nameRequired"),
    ("food", "Food", "GIFT", "Invalid type: GIFT"),
])
def test_validation_happens_before_sending(category_service, backend, code, name, kind, key):
    with pytest.raises(ValidationFailure) as info:
        category_service.create(code, name, kind)
    assert str(info.value) == key
    assert backend.requests == []


def test_delete_quotes_code(category_service, seeded):
    category_service.delete("food")
    assert seeded.requests[-1].method == "DELETE"
    assert seeded.requests[-1].url.path == "/categories/food"
    assert [c["code"] for c in seeded.categories] == ["salary", "taxi"]


def test_bad_category_record_is_network_failure(category_service, backend):
    backend.categories.append({"id": 1, "code": "x", "name": "X", "type": "GIFT"})
    with pytest.raises(NetworkFailure):
        category_service.get_page(0)
