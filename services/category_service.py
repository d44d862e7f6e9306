from api.category_api import CategoryApi
from api.errors import ValidationFailure
from models.category import Category, CategoryDraft
from models.page import Page
from utils.constants import TRANSACTION_KINDS
from utils.settings import settings

# the transaction dialog loads one large page and filters locally
PICKER_PAGE_SIZE = 100


class CategoryService:
    def __init__(self, category_api: CategoryApi, page_size: int | None = None):
        self._api = category_api
        self.page_size = page_size or settings.categories_page_size

    def get_page(self, page: int = 0) -> Page[Category]:
        return self._api.list(page, self.page_size)

    def get_for_kind(self, kind: str) -> list[Category]:
        """Categories offered when creating a transaction of this kind."""
        page = self._api.list(0, PICKER_PAGE_SIZE)
        return [c for c in page.content if c.kind == kind]

    def create(self, code: str, name: str, kind: str, description: str = "") -> Category:
        draft = self.validate(code, name, kind, description)
        return self._api.create(draft)

    def delete(self, code: str):
        self._api.delete(code)

    def validate(self, code: str, name: str, kind: str, description: str = "") -> CategoryDraft:
        code = code.strip()
        name = name.strip()
        if not code:
            raise ValidationFailure("categories.codeRequired")
        if not name:
            raise ValidationFailure("categories.nameRequired")
        if kind not in TRANSACTION_KINDS:
            raise ValidationFailure(f"Invalid type: {kind}")
        return CategoryDraft(code=code, name=name, kind=kind, description=description or None)
