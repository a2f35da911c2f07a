"""Public pages: home listing, article detail, category detail."""

from django.http import Http404
from django.shortcuts import render
from django.views.decorators.http import require_GET

from ..repositories import ArticleRepository, CategoryRepository


@require_GET
def home(request):
    return render(
        request,
        "pages/home/index.html",
        {
            "articles": ArticleRepository.find_all(),
            "categories": CategoryRepository.find_all(),
        },
    )


@require_GET
def article_show(request, slug: str):
    article = ArticleRepository.find_one_by_slug(slug)
    if article is None:
        raise Http404("Article not found")
    return render(request, "pages/article/show.html", {"article": article})


@require_GET
def category_show(request, slug: str):
    category = CategoryRepository.find_one_by_slug(slug)
    if category is None:
        raise Http404("Category not found")
    return render(
        request,
        "pages/category/show.html",
        {
            "category": category,
            "articles": ArticleRepository.find_by_category(category),
        },
    )
