"""Routing for the public pages and the article back office."""

from django.urls import path

from .views import admin, public

urlpatterns = [
    path("", public.home, name="home"),
    path("article/<slug:slug>", public.article_show, name="article_show"),
    path("category/<slug:slug>", public.category_show, name="category_show"),
    path("admin/article", admin.index, name="admin_article_index"),
    path("admin/article/new", admin.new, name="admin_article_new"),
    path("admin/article/<int:pk>/edit", admin.edit, name="admin_article_edit"),
    path("admin/article/<int:pk>", admin.delete, name="admin_article_delete"),
]
