"""Seed default categories and bootstrap the first Administrator."""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from authentication.models import Role
from categories.models import Category

DEFAULT_CATEGORIES = [
    ("Software", ""),
    ("Electronics", ""),
    ("Mechanics", ""),
    ("Civil", ""),
]


def create_seed_categories() -> dict[str, Category]:
    """Create the default categories if missing and return a name->Category map."""
    categories = {}
    for name, image_url in DEFAULT_CATEGORIES:
        category, _ = Category.objects.get_or_create(name=name, defaults={"image_url": image_url})
        categories[name] = category
    return categories


def promote_administrator(google_sub: str):
    """Create or promote the user with ``google_sub`` to Administrator.

    Returns ``(user, created)``.
    """
    User = get_user_model()
    user = User.objects.filter(google_sub=google_sub).first()
    if user is None:
        return User.objects.create_user(google_sub, role=Role.ADMINISTRATOR), True
    if user.role != Role.ADMINISTRATOR:
        user.role = Role.ADMINISTRATOR
        user.save(update_fields=["role", "updated_at"])
    return user, False


class Command(BaseCommand):
    """Management command to seed categories and an Administrator."""

    help = (
        "Seed the default blog categories. Use --admin-sub to create or promote "
        "the Administrator signing in with that Google account, and --reset to "
        "remove seeded categories no article uses before seeding."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete the default categories that no article references first.",
        )
        parser.add_argument(
            "--admin-sub",
            dest="admin_sub",
            help="Google subject identifier of the account to make Administrator.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            self._reset_seeded_data()

        self.stdout.write("Seeding categories...")
        create_seed_categories()

        admin_sub = options.get("admin_sub")
        if admin_sub:
            user, created = promote_administrator(admin_sub)
            verb = "Created" if created else "Promoted"
            self.stdout.write(f"{verb} Administrator {user.pk} ({admin_sub}).")

        self.stdout.write(self.style.SUCCESS("Blog seed completed."))

    def _reset_seeded_data(self) -> None:
        """Remove seeded categories that are not referenced by any article."""
        self.stdout.write("Resetting previously seeded categories...")
        names = [name for name, _ in DEFAULT_CATEGORIES]
        Category.objects.filter(name__in=names, articles__isnull=True).delete()
        self.stdout.write(self.style.WARNING("Seeded categories cleared."))
