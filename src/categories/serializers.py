"""Serializers for category payloads and responses."""

from rest_framework import serializers

from .models import Category


class CategorySerializer(serializers.ModelSerializer):
    imageUrl = serializers.CharField(source="image_url", read_only=True)

    class Meta:
        """Expose the category with camelCase field names."""
        model = Category
        fields = ["id", "name", "imageUrl"]
        read_only_fields = fields


class CategoryInputSerializer(serializers.Serializer):
    """Body of POST and PUT /categories."""

    name = serializers.CharField(max_length=255)
    imageUrl = serializers.CharField(max_length=1024, required=False, allow_blank=True, default="")


__all__ = ["CategorySerializer", "CategoryInputSerializer"]
