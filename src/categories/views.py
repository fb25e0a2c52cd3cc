"""Category endpoints: open reads, Administrator-only writes."""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from access_control.policy import Action, Resource, authorize
from core.exceptions import InvalidInput
from core.handlers import BaseViewSet

from .models import Category
from .repositories import CategoryInUse
from .serializers import CategoryInputSerializer, CategorySerializer


class CategoryViewSet(BaseViewSet):
    serializer_class = CategorySerializer

    def list(self, request):
        """Return every category."""
        return Response(CategorySerializer(self.deps.categories.get_all(), many=True).data)

    def retrieve(self, request, pk=None):
        """Return the category with matching ID."""
        category = self.load(self.deps.categories.get, self.parse_id(pk), "category")
        return Response(CategorySerializer(category).data)

    @extend_schema(request=CategoryInputSerializer, responses=CategorySerializer)
    def create(self, request):
        """Register a new category."""
        data = self.parse_payload(CategoryInputSerializer, request.data, "category")
        caller = self.require_user(request, "you must be authenticated to create a category")
        self.enforce(authorize(caller, Action.CREATE, Resource.CATEGORY))

        category = self.deps.categories.create(Category(name=data["name"], image_url=data["imageUrl"]))
        created = self.load(self.deps.categories.get, category.pk, "category")
        return Response(CategorySerializer(created).data)

    @extend_schema(request=CategoryInputSerializer, responses=CategorySerializer)
    def update(self, request, pk=None):
        """Replace a category's name and image."""
        category_id = self.parse_id(pk)
        data = self.parse_payload(CategoryInputSerializer, request.data, "category")
        caller = self.require_user(request, "you must be authenticated to update a category")
        category = self.load(self.deps.categories.get, category_id, "category")
        self.enforce(authorize(caller, Action.UPDATE, Resource.CATEGORY, category))

        category.name = data["name"]
        category.image_url = data["imageUrl"]
        self.deps.categories.update(category)
        updated = self.load(self.deps.categories.get, category_id, "category")
        return Response(CategorySerializer(updated).data)

    def destroy(self, request, pk=None):
        """Delete a category no article refers to."""
        category_id = self.parse_id(pk)
        caller = self.require_user(request, "you must be authenticated to delete a category")
        category = self.load(self.deps.categories.get, category_id, "category")
        self.enforce(authorize(caller, Action.DELETE, Resource.CATEGORY, category))

        try:
            self.deps.categories.delete(category_id)
        except CategoryInUse:
            raise InvalidInput("category still has articles")
        return Response(status=status.HTTP_204_NO_CONTENT)


__all__ = ["CategoryViewSet"]
