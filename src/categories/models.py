"""Category model: a topical grouping articles must belong to."""

from django.db import models


class Category(models.Model):
    name = models.CharField(max_length=255)
    image_url = models.CharField(max_length=1024, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.name


__all__ = ["Category"]
