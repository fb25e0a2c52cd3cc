"""Article model: content owned by its author and filed under a category."""

from django.conf import settings
from django.db import models


class Article(models.Model):
    """Blog article; ``user`` is the author and never changes after creation."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="articles")
    category = models.ForeignKey("categories.Category", on_delete=models.PROTECT, related_name="articles")
    title = models.CharField(max_length=255)
    body = models.TextField(blank=True)
    image_url = models.CharField(max_length=1024, blank=True)
    tags = models.CharField(max_length=1024, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.title


__all__ = ["Article"]
