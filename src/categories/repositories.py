"""Category store: capability interface and Django ORM implementation."""

from typing import Protocol

from django.db.models import ProtectedError

from .models import Category


class CategoryInUse(Exception):
    """Raised when deleting a category that articles still reference."""


class CategoriesRepository(Protocol):
    def get_all(self) -> list[Category]: ...

    def get(self, category_id: int) -> Category | None: ...

    def create(self, category: Category) -> Category: ...

    def update(self, category: Category) -> Category: ...

    def delete(self, category_id: int) -> None: ...


class DjangoCategoriesRepository:
    """CategoriesRepository backed by the default database."""

    def get_all(self) -> list[Category]:
        return list(Category.objects.all())

    def get(self, category_id: int) -> Category | None:
        return Category.objects.filter(pk=category_id).first()

    def create(self, category: Category) -> Category:
        category.save(force_insert=True)
        return category

    def update(self, category: Category) -> Category:
        category.save()
        return category

    def delete(self, category_id: int) -> None:
        try:
            Category.objects.filter(pk=category_id).delete()
        except ProtectedError as exc:
            raise CategoryInUse(category_id) from exc


__all__ = ["CategoriesRepository", "CategoryInUse", "DjangoCategoriesRepository"]
