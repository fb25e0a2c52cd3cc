"""Category endpoints: open reads, Administrator-only writes."""

from __future__ import annotations

from django.test import SimpleTestCase, TestCase

from articles.models import Article
from authentication.models import Role
from categories.models import Category
from tests.utils import (
    FakeIdentityResolver,
    InMemoryArticlesRepository,
    InMemoryCategoriesRepository,
    InMemoryUsersRepository,
    client_with_token,
    create_user,
    google_profile,
    use_dependencies,
    use_google_tokens,
)


class CategoryEndpointTests(TestCase):
    """End-to-end category CRUD against the database."""

    @classmethod
    def setUpTestData(cls):
        cls.admin = create_user("google-admin", Role.ADMINISTRATOR)
        cls.reader = create_user("google-reader", Role.READER)
        cls.writer = create_user("google-writer", Role.WRITER)
        cls.software = Category.objects.create(name="Software", image_url="http://img/software.png")

    def setUp(self):
        use_google_tokens(
            self,
            {
                "admin-token": google_profile("google-admin"),
                "reader-token": google_profile("google-reader"),
                "writer-token": google_profile("google-writer"),
            },
        )
        self.admin_client = client_with_token("admin-token")
        self.reader_client = client_with_token("reader-token")
        self.anonymous_client = client_with_token()

    def test_anyone_can_list_and_retrieve(self):
        listing = self.anonymous_client.get("/v1/categories")
        self.assertEqual(listing.status_code, 200)
        self.assertEqual(listing.json(), [{"id": self.software.pk, "name": "Software", "imageUrl": "http://img/software.png"}])

        detail = self.anonymous_client.get(f"/v1/categories/{self.software.pk}/")
        self.assertEqual(detail.status_code, 200)
        self.assertEqual(detail.json()["name"], "Software")

    def test_administrator_creates_category(self):
        response = self.admin_client.post(
            "/v1/categories", {"name": "Tech", "imageUrl": "http://x/y.png"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["name"], "Tech")
        self.assertEqual(body["imageUrl"], "http://x/y.png")

        fetched = self.anonymous_client.get(f"/v1/categories/{body['id']}")
        self.assertEqual(fetched.json(), body)

    def test_reader_cannot_create_category(self):
        response = self.reader_client.post(
            "/v1/categories", {"name": "Tech", "imageUrl": "http://x/y.png"}, format="json"
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["code"], 403)
        self.assertFalse(Category.objects.filter(name="Tech").exists())

    def test_writer_cannot_update_category(self):
        response = client_with_token("writer-token").put(
            f"/v1/categories/{self.software.pk}", {"name": "Hacked"}, format="json"
        )

        self.assertEqual(response.status_code, 403)
        self.software.refresh_from_db()
        self.assertEqual(self.software.name, "Software")

    def test_anonymous_create_is_forbidden(self):
        response = self.anonymous_client.post("/v1/categories", {"name": "Tech"}, format="json")

        self.assertEqual(response.status_code, 403)

    def test_administrator_updates_category(self):
        response = self.admin_client.put(
            f"/v1/categories/{self.software.pk}", {"name": "Software Engineering"}, format="json"
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["name"], "Software Engineering")
        self.software.refresh_from_db()
        self.assertEqual(self.software.name, "Software Engineering")

    def test_delete_then_get_is_not_found(self):
        response = self.admin_client.delete(f"/v1/categories/{self.software.pk}")

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.anonymous_client.get(f"/v1/categories/{self.software.pk}").status_code, 404)

    def test_category_with_articles_cannot_be_deleted(self):
        Article.objects.create(user=self.writer, category=self.software, title="Django tips")

        response = self.admin_client.delete(f"/v1/categories/{self.software.pk}")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "category still has articles")
        self.assertTrue(Category.objects.filter(pk=self.software.pk).exists())

    def test_missing_category_is_not_found(self):
        response = self.admin_client.put("/v1/categories/9999", {"name": "Ghost"}, format="json")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"code": 404, "message": "category with provided id not found"})

    def test_non_numeric_id_is_invalid_input(self):
        response = self.anonymous_client.get("/v1/categories/abc")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], 400)

    def test_missing_name_is_invalid_input(self):
        response = self.admin_client.post("/v1/categories", {"imageUrl": "http://x/y.png"}, format="json")

        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.json()["message"].startswith("invalid category: name"))


class CategoryHandlerTests(SimpleTestCase):
    """Handler sequence against in-memory stores."""

    def setUp(self):
        self.users = InMemoryUsersRepository()
        self.admin = self.users.add(google_sub="google-admin", role=Role.ADMINISTRATOR)
        self.reader = self.users.add(google_sub="google-reader", role=Role.READER)
        self.articles = InMemoryArticlesRepository()
        self.categories = InMemoryCategoriesRepository(self.articles)
        self.category = self.categories.add("Civil")
        use_dependencies(
            self,
            users=self.users,
            categories=self.categories,
            articles=self.articles,
            identity_resolver=FakeIdentityResolver(
                self.users, {"admin-token": self.admin.pk, "reader-token": self.reader.pk}
            ),
        )

    def test_invalid_payload_is_reported_before_authentication(self):
        response = client_with_token("not-a-token").post("/v1/categories", {}, format="json")

        self.assertEqual(response.status_code, 400)

    def test_unknown_token_is_forbidden(self):
        response = client_with_token("not-a-token").delete(f"/v1/categories/{self.category.pk}")

        self.assertEqual(response.status_code, 403)
        self.assertIsNotNone(self.categories.get(self.category.pk))

    def test_not_found_is_checked_before_policy(self):
        response = client_with_token("reader-token").delete("/v1/categories/42")

        self.assertEqual(response.status_code, 404)

    def test_in_use_category_is_kept(self):
        self.articles.add(self.admin, self.category, "Bridges")

        response = client_with_token("admin-token").delete(f"/v1/categories/{self.category.pk}")

        self.assertEqual(response.status_code, 400)
        self.assertIsNotNone(self.categories.get(self.category.pk))
