"""Routing for the article endpoints."""

from django.urls import re_path

from .views import ArticleViewSet

article_list = ArticleViewSet.as_view({"get": "list", "post": "create"})
article_detail = ArticleViewSet.as_view({"get": "retrieve", "put": "update", "delete": "destroy"})

urlpatterns = [
    re_path(r"^articles/?$", article_list, name="article-list"),
    re_path(r"^articles/(?P<pk>[^/]+)/?$", article_detail, name="article-detail"),
]
