from urllib.parse import quote

from api.errors import NetworkFailure
from api.http_client import ApiClient
from models.category import Category, CategoryDraft
from models.page import Page


class CategoryApi:
    def __init__(self, client: ApiClient):
        self._client = client

    def list(self, page: int = 0, size: int = 10) -> Page[Category]:
        data = self._client.get("/categories", params={"page": page, "size": size})
        try:
            return Page.from_payload(data, Category.from_payload, page=page)
        except (KeyError, ValueError, TypeError) as e:
            raise NetworkFailure(f"Invalid category data from backend: {e}") from e

    def create(self, draft: CategoryDraft) -> Category:
        data = self._client.post("/categories", json=draft.to_payload())
        try:
            return Category.from_payload(data)
        except (KeyError, ValueError, TypeError) as e:
            raise NetworkFailure(f"Invalid category data from backend: {e}") from e

    def delete(self, code: str) -> None:
        self._client.delete(f"/categories/{quote(code, safe='')}")
