"""Article endpoints guarded by role and ownership rules."""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from access_control.policy import Action, Resource, authorize
from core.exceptions import InvalidInput
from core.handlers import BaseViewSet

from .models import Article
from .serializers import ArticleInputSerializer, ArticleSerializer


class ArticleViewSet(BaseViewSet):
    serializer_class = ArticleSerializer

    def list(self, request):
        """Return every article with author and category."""
        return Response(ArticleSerializer(self.deps.articles.get_all(), many=True).data)

    def retrieve(self, request, pk=None):
        """Return the article with matching ID."""
        article = self.load(self.deps.articles.get, self.parse_id(pk), "article")
        return Response(ArticleSerializer(article).data)

    def _category(self, category_id: int):
        category = self.deps.categories.get(category_id)
        if category is None:
            raise InvalidInput("category with provided id could not be retrieved")
        return category

    @extend_schema(request=ArticleInputSerializer, responses=ArticleSerializer)
    def create(self, request):
        """Create an article owned by the caller (Writers and Administrators)."""
        data = self.parse_payload(ArticleInputSerializer, request.data, "article")
        caller = self.require_user(request, "you must be authenticated to create an article")
        self.enforce(authorize(caller, Action.CREATE, Resource.ARTICLE))
        category = self._category(data["categoryId"])

        article = Article(
            user=caller,
            category=category,
            title=data["title"],
            body=data["body"],
            image_url=data["imageUrl"],
            tags=data["tags"],
        )
        article = self.deps.articles.create(article)
        created = self.load(self.deps.articles.get, article.pk, "article")
        return Response(ArticleSerializer(created).data)

    @extend_schema(request=ArticleInputSerializer, responses=ArticleSerializer)
    def update(self, request, pk=None):
        """Update an article; only its owner may do so."""
        article_id = self.parse_id(pk)
        data = self.parse_payload(ArticleInputSerializer, request.data, "article")
        caller = self.require_user(request, "you must be authenticated to update an article")
        article = self.load(self.deps.articles.get, article_id, "article")
        self.enforce(authorize(caller, Action.UPDATE, Resource.ARTICLE, article))
        category = self._category(data["categoryId"])

        article.category = category
        article.title = data["title"]
        article.body = data["body"]
        article.image_url = data["imageUrl"]
        article.tags = data["tags"]
        self.deps.articles.update(article)
        updated = self.load(self.deps.articles.get, article_id, "article")
        return Response(ArticleSerializer(updated).data)

    def destroy(self, request, pk=None):
        """Delete an article; its owner or any Administrator may do so."""
        article_id = self.parse_id(pk)
        caller = self.require_user(request, "you must be authenticated to delete an article")
        article = self.load(self.deps.articles.get, article_id, "article")
        self.enforce(authorize(caller, Action.DELETE, Resource.ARTICLE, article))

        self.deps.articles.delete(article_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


__all__ = ["ArticleViewSet"]
