"""Back-office article management, limited to the signed-in author's own articles."""

import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_http_methods, require_POST

from ..forms import ArticleForm
from ..models import Article
from ..repositories import ArticleRepository
from ..services import ArticleService, NotArticleAuthor
from ..tokens import is_delete_token_valid

logger = logging.getLogger(__name__)

IMAGE_UPLOAD_ERROR = "The image could not be uploaded."


def _article_form(request, instance: Article) -> ArticleForm:
    if request.method == "POST":
        return ArticleForm(request.POST, request.FILES, instance=instance)
    return ArticleForm(instance=instance)


@login_required
@require_http_methods(["GET"])
def index(request):
    articles = ArticleRepository.find_by_author(request.user)
    return render(request, "pages/admin/article/index.html", {"articles": articles})


@login_required
@require_http_methods(["GET", "POST"])
def new(request):
    article = Article()
    form = _article_form(request, article)

    if form.is_bound and form.is_valid():
        outcome = ArticleService().create(
            request.user, form.instance, image=form.cleaned_data.get("image_file")
        )
        if outcome.image_failed:
            messages.error(request, IMAGE_UPLOAD_ERROR)
        messages.success(request, "Article created.")
        return redirect("admin_article_index")

    return render(request, "pages/admin/article/new.html", {"article": article, "form": form})


@login_required
@require_http_methods(["GET", "POST"])
def edit(request, pk: int):
    article = get_object_or_404(Article.objects.select_related("category", "author"), pk=pk)
    service = ArticleService()
    try:
        service.ensure_author(request.user, article, "edit")
    except NotArticleAuthor:
        messages.error(request, "You cannot edit this article.")
        return redirect("admin_article_index")

    # Validation writes into the form's instance; keep `article` as stored for the page.
    form = _article_form(request, Article.objects.get(pk=article.pk))
    if form.is_bound and form.is_valid():
        outcome = service.update(request.user, form.instance, image=form.cleaned_data.get("image_file"))
        if outcome.image_failed:
            messages.error(request, IMAGE_UPLOAD_ERROR)
        messages.success(request, "Article updated.")
        return redirect("admin_article_index")

    return render(request, "pages/admin/article/edit.html", {"article": article, "form": form})


@login_required
@require_POST
def delete(request, pk: int):
    article = get_object_or_404(Article, pk=pk)
    service = ArticleService()
    try:
        service.ensure_author(request.user, article, "delete")
    except NotArticleAuthor:
        messages.error(request, "You cannot delete this article.")
        return redirect("admin_article_index")

    if is_delete_token_valid(request, article, request.POST.get("_token")):
        service.delete(request.user, article)
        messages.success(request, "Article deleted.")
    else:
        logger.info("Ignored delete of article %s: invalid token", article.pk)

    return redirect("admin_article_index")
