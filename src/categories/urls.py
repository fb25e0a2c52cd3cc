"""Routing for the category endpoints."""

from django.urls import re_path

from .views import CategoryViewSet

category_list = CategoryViewSet.as_view({"get": "list", "post": "create"})
category_detail = CategoryViewSet.as_view({"get": "retrieve", "put": "update", "delete": "destroy"})

urlpatterns = [
    re_path(r"^categories/?$", category_list, name="category-list"),
    re_path(r"^categories/(?P<pk>[^/]+)/?$", category_detail, name="category-detail"),
]
