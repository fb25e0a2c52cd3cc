"""Serializers for article payloads and responses."""

from rest_framework import serializers

from authentication.serializers import UserSerializer
from categories.serializers import CategorySerializer

from .models import Article


class ArticleSerializer(serializers.ModelSerializer):
    """Article with its author and category embedded."""

    userId = serializers.IntegerField(source="user_id", read_only=True)
    categoryId = serializers.IntegerField(source="category_id", read_only=True)
    imageUrl = serializers.CharField(source="image_url", read_only=True)
    user = UserSerializer(read_only=True)
    category = CategorySerializer(read_only=True)

    class Meta:
        """Expose article fields; ownership is never writable."""
        model = Article
        fields = ["id", "userId", "categoryId", "title", "body", "imageUrl", "tags", "user", "category"]
        read_only_fields = fields


class ArticleInputSerializer(serializers.Serializer):
    """Body of POST and PUT /articles."""

    categoryId = serializers.IntegerField(min_value=1)
    title = serializers.CharField(max_length=255)
    body = serializers.CharField(required=False, allow_blank=True, default="")
    imageUrl = serializers.CharField(max_length=1024, required=False, allow_blank=True, default="")
    tags = serializers.CharField(max_length=1024, required=False, allow_blank=True, default="")


__all__ = ["ArticleSerializer", "ArticleInputSerializer"]
