"""User endpoints: public reads, self-or-Administrator updates."""

from __future__ import annotations

import datetime

from django.test import TestCase

from authentication.models import Role
from tests.utils import User, client_with_token, create_user, google_profile, use_google_tokens


class UserEndpointTests(TestCase):
    """List, retrieve, and update users through the API."""

    @classmethod
    def setUpTestData(cls):
        cls.admin = create_user("google-admin", Role.ADMINISTRATOR, name="Admin")
        cls.reader = create_user("google-reader", Role.READER, name="Reader")
        cls.writer = create_user("google-writer", Role.WRITER, name="Writer")

    def setUp(self):
        use_google_tokens(
            self,
            {
                "admin-token": google_profile("google-admin"),
                "reader-token": google_profile("google-reader"),
                "writer-token": google_profile("google-writer"),
            },
        )

    def test_anyone_can_list_users(self):
        response = client_with_token().get("/v1/users")

        self.assertEqual(response.status_code, 200)
        self.assertEqual([user["googleSub"] for user in response.json()], ["google-admin", "google-reader", "google-writer"])

    def test_retrieve_user(self):
        response = client_with_token().get(f"/v1/users/{self.reader.pk}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {
                "id": self.reader.pk,
                "googleSub": "google-reader",
                "name": "Reader",
                "birthdate": None,
                "gender": "",
                "profilePictureUrl": "",
                "description": "",
                "shortDescription": "",
                "role": "Reader",
            },
        )

    def test_missing_user_is_not_found(self):
        response = client_with_token().get("/v1/users/9999")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"code": 404, "message": "user with provided id not found"})

    def test_user_updates_own_profile(self):
        response = client_with_token("reader-token").put(
            f"/v1/users/{self.reader.pk}",
            {
                "name": "Renamed",
                "birthdate": "1990-05-17",
                "gender": "female",
                "shortDescription": "Civil engineer",
            },
            format="json",
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["name"], "Renamed")
        self.reader.refresh_from_db()
        self.assertEqual(self.reader.birthdate, datetime.date(1990, 5, 17))
        self.assertEqual(self.reader.short_description, "Civil engineer")

    def test_user_cannot_promote_self(self):
        response = client_with_token("reader-token").put(
            f"/v1/users/{self.reader.pk}", {"name": "Sneaky", "role": "Administrator"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.reader.refresh_from_db()
        self.assertEqual(self.reader.name, "Sneaky")
        self.assertEqual(self.reader.role, Role.READER)

    def test_administrator_changes_role(self):
        response = client_with_token("admin-token").put(
            f"/v1/users/{self.reader.pk}", {"role": "Writer"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["role"], "Writer")

    def test_administrator_cannot_change_foreign_profile(self):
        response = client_with_token("admin-token").put(
            f"/v1/users/{self.reader.pk}", {"name": "Changed by admin"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.reader.refresh_from_db()
        self.assertEqual(self.reader.name, "Reader")

    def test_other_user_cannot_update(self):
        response = client_with_token("writer-token").put(
            f"/v1/users/{self.reader.pk}", {"name": "Hijacked"}, format="json"
        )

        self.assertEqual(response.status_code, 403)
        self.reader.refresh_from_db()
        self.assertEqual(self.reader.name, "Reader")

    def test_anonymous_update_is_forbidden(self):
        response = client_with_token().put(f"/v1/users/{self.reader.pk}", {"name": "Anon"}, format="json")

        self.assertEqual(response.status_code, 403)

    def test_google_sub_cannot_change(self):
        client_with_token("reader-token").put(
            f"/v1/users/{self.reader.pk}", {"googleSub": "someone-else"}, format="json"
        )

        self.assertTrue(User.objects.filter(pk=self.reader.pk, google_sub="google-reader").exists())

    def test_unknown_role_is_invalid_input(self):
        response = client_with_token("admin-token").put(
            f"/v1/users/{self.reader.pk}", {"role": "Overlord"}, format="json"
        )

        self.assertEqual(response.status_code, 400)
