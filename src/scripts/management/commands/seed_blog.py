"""Seed categories, demo authors, and sample articles."""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from articles.models import Article, Category
from articles.services import ArticleService
from articles.slugs import make_slug
from authentication.managers import UserManager

SEED_CATEGORIES = ["News", "Tutorials", "Opinion"]

SEED_USERS = [
    {"email": "alice@example.com", "first_name": "Alice", "password": "alicepass123"},
    {"email": "bob@example.com", "first_name": "Bob", "password": "bobpass123"},
]

SEED_ARTICLES = [
    ("alice@example.com", "News", "Hello, World!", "The first article on the blog."),
    ("alice@example.com", "Tutorials", "Writing your first article", "Pick a category and a title."),
    ("bob@example.com", "Opinion", "Why slugs matter", "Readable URLs are easier to share."),
]


def create_seed_categories() -> dict:
    """Create base categories if missing and return a name->Category map."""
    categories = {}
    for name in SEED_CATEGORIES:
        category, _ = Category.objects.get_or_create(name=name)
        categories[name] = category
    return categories


def create_seed_users() -> dict:
    """Create demo authors if missing and return an email->User map."""
    User = get_user_model()
    users = {}
    for entry in SEED_USERS:
        user, _ = User.objects.get_or_create(
            email=entry["email"],
            defaults={
                "first_name": entry["first_name"],
                "password_hash": UserManager.hash_password(entry["password"]),
            },
        )
        users[entry["email"]] = user
    return users


def create_seed_articles(users: dict, categories: dict) -> list:
    """Create sample articles through the article service, skipping existing slugs."""
    service = ArticleService()
    created = []
    for email, category_name, title, content in SEED_ARTICLES:
        if Article.objects.filter(slug=make_slug(title)).exists():
            continue
        article = Article(title=title, content=content, category=categories[category_name])
        created.append(service.create(users[email], article).article)
    return created


class Command(BaseCommand):
    """Management command to seed categories, authors, and articles."""

    help = (
        "Seed blog categories, demo authors, and sample articles. "
        "Use --reset to clear previously seeded data first."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Remove the demo authors, their articles, and the seeded categories before seeding.",
        )

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        if options.get("reset"):
            self._reset_seeded_data()

        self.stdout.write("Seeding blog data...")
        categories = create_seed_categories()
        users = create_seed_users()
        articles = create_seed_articles(users, categories)
        self.stdout.write(self.style.SUCCESS(f"Blog seed completed ({len(articles)} new articles)."))

    def _reset_seeded_data(self) -> None:
        """Remove demo authors with their articles, then the seeded categories.

        Articles are deleted through the service so their image files go too;
        categories still holding other authors' articles are left in place.
        """
        self.stdout.write("Resetting previously seeded blog data...")

        User = get_user_model()
        service = ArticleService()
        demo_users = User.objects.filter(email__in=[entry["email"] for entry in SEED_USERS])
        for user in demo_users:
            for article in Article.objects.filter(author=user):
                service.delete(user, article)
        demo_users.delete()

        Category.objects.filter(name__in=SEED_CATEGORIES, articles__isnull=True).delete()

        self.stdout.write(self.style.WARNING("Seeded blog data cleared."))
