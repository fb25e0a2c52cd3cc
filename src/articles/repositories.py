"""Article store: capability interface and Django ORM implementation.

Reads preload the author and category so responses can embed them without
extra queries.
"""

from typing import Protocol

from .models import Article


class ArticlesRepository(Protocol):
    def get_all(self) -> list[Article]: ...

    def get(self, article_id: int) -> Article | None: ...

    def create(self, article: Article) -> Article: ...

    def update(self, article: Article) -> Article: ...

    def delete(self, article_id: int) -> None: ...


class DjangoArticlesRepository:
    """ArticlesRepository backed by the default database."""

    @staticmethod
    def _queryset():
        return Article.objects.select_related("user", "category")

    def get_all(self) -> list[Article]:
        return list(self._queryset())

    def get(self, article_id: int) -> Article | None:
        return self._queryset().filter(pk=article_id).first()

    def create(self, article: Article) -> Article:
        article.save(force_insert=True)
        return article

    def update(self, article: Article) -> Article:
        article.save()
        return article

    def delete(self, article_id: int) -> None:
        Article.objects.filter(pk=article_id).delete()


__all__ = ["ArticlesRepository", "DjangoArticlesRepository"]
