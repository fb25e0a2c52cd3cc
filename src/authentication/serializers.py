"""Serializers for user responses and the PUT /users/:id payload."""

from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import Role

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public user profile, camelCase field names."""

    googleSub = serializers.CharField(source="google_sub", read_only=True)
    profilePictureUrl = serializers.CharField(source="profile_picture_url", read_only=True)
    shortDescription = serializers.CharField(source="short_description", read_only=True)

    class Meta:
        """Every field is read-only; updates go through UserUpdateSerializer."""
        model = User
        fields = [
            "id",
            "googleSub",
            "name",
            "birthdate",
            "gender",
            "profilePictureUrl",
            "description",
            "shortDescription",
            "role",
        ]
        read_only_fields = fields


class UserUpdateSerializer(serializers.Serializer):
    """Fields a PUT /users/:id body may carry; all optional.

    Unknown keys (``id``, ``googleSub``) are ignored: neither can change.
    """

    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    birthdate = serializers.DateField(required=False, allow_null=True)
    gender = serializers.CharField(max_length=50, required=False, allow_blank=True)
    profilePictureUrl = serializers.CharField(max_length=1024, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    shortDescription = serializers.CharField(max_length=255, required=False, allow_blank=True)
    role = serializers.ChoiceField(choices=Role.choices, required=False)

    # Payload key -> model attribute.
    FIELD_MAP = {
        "name": "name",
        "birthdate": "birthdate",
        "gender": "gender",
        "profilePictureUrl": "profile_picture_url",
        "description": "description",
        "shortDescription": "short_description",
        "role": "role",
    }


__all__ = ["UserSerializer", "UserUpdateSerializer"]
