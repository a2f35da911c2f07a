"""Back-office registration for categories and articles."""

from django.contrib import admin

from .forms import CategoryAdminForm
from .models import Article, Category


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    form = CategoryAdminForm
    list_display = ["name", "slug"]
    search_fields = ["name"]
    readonly_fields = ["slug"]


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    """View-only listing; authors create, edit, and delete from the article back office
    so slugs, ownership, and image files stay consistent."""

    list_display = ["title", "slug", "category", "author", "created_at"]
    list_filter = ["category"]
    search_fields = ["title", "content"]
    list_select_related = ["category", "author"]

    def has_add_permission(self, request) -> bool:
        return False

    def has_change_permission(self, request, obj=None) -> bool:
        return False

    def has_delete_permission(self, request, obj=None) -> bool:
        return False
