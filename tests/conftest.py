import json
from datetime import timezone

import httpx
import pytest

from api.auth_api import AuthApi
from api.category_api import CategoryApi
from api.http_client import ApiClient
from api.transaction_api import TransactionApi
from services.category_service import CategoryService
from services.dispatcher import Dispatcher
from services.session import Session
from services.transaction_service import TransactionService
from services.transaction_store import TransactionStore
from utils.app_config import AppConfig

BASE_URL = "http://backend.test"


class FakeBackend:
    """In-memory stand-in for the REST backend, served through httpx.MockTransport.

    Create and update responses leave out ``type`` like the real one does.
    Set ``fail[(method, path)] = (status, body)`` to force an error.
    """

    def __init__(self):
        self.transactions: list[dict] = []
        self.categories: list[dict] = []
        self.requests: list[httpx.Request] = []
        self.fail: dict[tuple[str, str], tuple[int, dict | None]] = {}
        self.now = "2024-02-15T10:00:00Z"
        self._next_id = 100

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def add_transaction(self, tx_id, amount, kind, date, category="misc", description=None):
        self.transactions.append({
            "id": tx_id, "amount": amount, "category": category,
            "type": kind, "date": date, "description": description,
        })

    def add_category(self, code, name, kind, description=None):
        self.categories.append({
            "id": len(self.categories) + 1, "code": code, "name": name,
            "type": kind, "description": description,
        })

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method, path = request.method, request.url.path
        if (method, path) in self.fail:
            status, body = self.fail[(method, path)]
            return httpx.Response(status, json=body) if body is not None else httpx.Response(status)

        body = json.loads(request.content) if request.content else None
        parts = path.strip("/").split("/")

        if path in ("/users/login", "/users/register"):
            return httpx.Response(200, json={"token": "token-123"})
        if path == "/categories":
            if method == "GET":
                return self._page(request, self.categories)
            created = {"id": len(self.categories) + 1, **body}
            self.categories.append(created)
            return httpx.Response(201, json=created)
        if parts[0] == "categories" and method == "DELETE":
            self.categories = [c for c in self.categories if c["code"] != parts[1]]
            return httpx.Response(204)
        if path == "/transactions" and method == "GET":
            return self._page(request, self.transactions)
        if path in ("/transactions/income", "/transactions/expense"):
            self._next_id += 1
            record = {
                "id": str(self._next_id),
                "amount": body["amount"],
                "category": body["category"],
                "date": body.get("date") or self.now,
                "description": body.get("description"),
            }
            self.transactions.append({**record, "type": parts[1].upper()})
            return httpx.Response(201, json=record)
        if parts[0] == "transactions" and len(parts) == 2:
            existing = next((t for t in self.transactions if t["id"] == parts[1]), None)
            if existing is None:
                return httpx.Response(404, json={"message": "Transaction not found"})
            if method == "DELETE":
                self.transactions.remove(existing)
                return httpx.Response(200)
            if method == "PUT":
                existing.update(amount=body["amount"], description=body.get("description"))
                return httpx.Response(200, json={k: v for k, v in existing.items() if k != "type"})
        return httpx.Response(404, json={"message": "No route"})

    def _page(self, request: httpx.Request, items: list[dict]) -> httpx.Response:
        page = int(request.url.params.get("page", 0))
        size = int(request.url.params.get("size", 10))
        chunk = items[page * size:(page + 1) * size]
        return httpx.Response(200, json={
            "content": chunk,
            "number": page,
            "hasNext": (page + 1) * size < len(items),
        })


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def config(tmp_path):
    return AppConfig(tmp_path / "config")


@pytest.fixture
def session(config):
    return Session(config)


@pytest.fixture
def client(backend, session):
    c = ApiClient(base_url=BASE_URL, timeout=5, token_provider=lambda: session.token,
                  transport=backend.transport())
    yield c
    c.close()


@pytest.fixture
def auth_failures():
    return []


@pytest.fixture
def dispatcher(auth_failures):
    return Dispatcher(on_auth_failure=lambda: auth_failures.append(True))


@pytest.fixture
def auth_api(client):
    return AuthApi(client)


@pytest.fixture
def category_service(client):
    return CategoryService(CategoryApi(client), page_size=2)


@pytest.fixture
def tx_service(client):
    return TransactionService(TransactionApi(client), page_size=2)


@pytest.fixture
def store(tx_service, dispatcher):
    return TransactionStore(tx_service, dispatcher, tz=timezone.utc)
