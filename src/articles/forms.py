"""Back-office article form."""

from django import forms

from .models import Article, Category
from .slugs import make_slug


class ArticleForm(forms.ModelForm):
    """Title, content, category, and an optional image upload.

    Slug, creation date, and author are never taken from the submission; the
    article service sets them.
    """

    image_file = forms.ImageField(required=False, label="Image")

    class Meta:
        model = Article
        fields = ["title", "content", "category"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["category"].queryset = Category.objects.order_by("name")

    def clean_title(self):
        """Reject titles without a usable slug or whose slug another article already has."""
        title = self.cleaned_data["title"]
        slug = make_slug(title)
        if not slug:
            raise forms.ValidationError("The title must contain at least one letter or digit.")
        clashes = Article.objects.filter(slug=slug)
        if self.instance.pk:
            clashes = clashes.exclude(pk=self.instance.pk)
        if clashes.exists():
            raise forms.ValidationError("An article with a similar title already exists.")
        return title


class CategoryAdminForm(forms.ModelForm):
    """Category name whose derived slug must be non-empty and unused by other categories."""

    class Meta:
        model = Category
        fields = ["name"]

    def clean_name(self):
        name = self.cleaned_data["name"]
        slug = make_slug(name)
        if not slug:
            raise forms.ValidationError("The name must contain at least one letter or digit.")
        clashes = Category.objects.filter(slug=slug)
        if self.instance.pk:
            clashes = clashes.exclude(pk=self.instance.pk)
        if clashes.exists():
            raise forms.ValidationError("A category with a similar name already exists.")
        return name


__all__ = ["ArticleForm", "CategoryAdminForm"]
