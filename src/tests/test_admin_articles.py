"""Back-office article CRUD: ownership, uploads, and delete tokens."""

from __future__ import annotations

import re
from unittest import mock

from django.core.files.storage import FileSystemStorage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from django.utils import timezone

from articles.images import ArticleImageStore
from articles.models import Article
from tests.utils import (
    TemporaryImagesDirMixin,
    create_article,
    create_user,
    delete_token_for,
    make_image_upload,
    seed_categories,
)


class AdminArticleTestCase(TemporaryImagesDirMixin, TestCase):
    """Two authors, each with one article; the client is signed in as the owner."""

    @classmethod
    def setUpTestData(cls):
        cls.categories = seed_categories()
        cls.owner = create_user("owner@test.com")
        cls.intruder = create_user("intruder@test.com")
        cls.article = create_article(cls.owner, cls.categories["News"], "Owner article", image="")
        cls.foreign = create_article(cls.intruder, cls.categories["News"], "Intruder article", minutes=1)

    def setUp(self):
        super().setUp()
        self.client.force_login(self.owner)

    def article_payload(self, **overrides):
        payload = {
            "title": "Hello, World!",
            "content": "Some content",
            "category": self.categories["Tutorials"].pk,
        }
        payload.update(overrides)
        return payload


class AdminIndexTests(AdminArticleTestCase):
    def test_lists_only_own_articles(self):
        response = self.client.get("/admin/article")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["articles"], [self.article])
        self.assertContains(response, "Owner article")
        self.assertNotContains(response, "Intruder article")

    def test_renders_delete_token_for_each_article(self):
        response = self.client.get("/admin/article")
        self.assertContains(response, delete_token_for(self.client, self.article))

    def test_requires_login(self):
        self.client.logout()

        for url in ("/admin/article", "/admin/article/new", f"/admin/article/{self.article.pk}/edit"):
            with self.subTest(url=url):
                response = self.client.get(url)
                self.assertRedirects(response, f"/login/?next={url}", fetch_redirect_response=False)


class AdminCreateTests(AdminArticleTestCase):
    def test_get_renders_empty_form(self):
        response = self.client.get("/admin/article/new")

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "pages/admin/article/new.html")
        self.assertFalse(response.context["form"].is_bound)

    def test_create_sets_slug_author_and_timestamp(self):
        before = timezone.now()
        response = self.client.post("/admin/article/new", self.article_payload(), follow=True)

        self.assertRedirects(response, "/admin/article")
        self.assertContains(response, "Article created.")
        article = Article.objects.get(slug="hello-world")
        self.assertEqual(article.title, "Hello, World!")
        self.assertEqual(article.author, self.owner)
        self.assertEqual(article.category, self.categories["Tutorials"])
        self.assertGreaterEqual(article.created_at, before)
        self.assertEqual(article.image, "")
        self.assertEqual(self.stored_images(), [])

    def test_submitted_slug_author_and_date_are_ignored(self):
        payload = self.article_payload(slug="chosen", author=self.intruder.pk, created_at="2000-01-01")
        self.client.post("/admin/article/new", payload)

        article = Article.objects.get(title="Hello, World!")
        self.assertEqual(article.slug, "hello-world")
        self.assertEqual(article.author, self.owner)
        self.assertGreater(article.created_at.year, 2000)

    def test_create_with_image_stores_uniquely_named_file(self):
        upload = make_image_upload("My Holiday Photo.jpg", image_format="PNG", content_type="image/jpeg")
        self.client.post("/admin/article/new", self.article_payload(image_file=upload))

        article = Article.objects.get(slug="hello-world")
        self.assertRegex(article.image, r"^my-holiday-photo-[0-9a-f]{13}\.png$")
        self.assertEqual(self.stored_images(), [article.image])

    def test_two_uploads_with_same_name_get_distinct_files(self):
        self.client.post(
            "/admin/article/new",
            self.article_payload(image_file=make_image_upload("cover.png")),
        )
        self.client.post(
            "/admin/article/new",
            self.article_payload(title="Another one", image_file=make_image_upload("cover.png")),
        )

        images = self.stored_images()
        self.assertEqual(len(images), 2)
        self.assertTrue(all(re.match(r"^cover-[0-9a-f]{13}\.png$", name) for name in images))

    def test_failed_image_move_still_creates_article(self):
        with mock.patch.object(FileSystemStorage, "save", side_effect=OSError("disk full")):
            response = self.client.post(
                "/admin/article/new",
                self.article_payload(image_file=make_image_upload()),
                follow=True,
            )

        self.assertContains(response, "The image could not be uploaded.")
        self.assertContains(response, "Article created.")
        article = Article.objects.get(slug="hello-world")
        self.assertEqual(article.image, "")
        self.assertEqual(self.stored_images(), [])

    def test_invalid_submission_redisplays_form(self):
        response = self.client.post("/admin/article/new", self.article_payload(title=""))

        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "pages/admin/article/new.html")
        self.assertIn("title", response.context["form"].errors)
        self.assertFalse(Article.objects.filter(author=self.owner, content="Some content").exists())

    def test_title_without_slug_characters_is_rejected(self):
        response = self.client.post("/admin/article/new", self.article_payload(title="!!!"))

        self.assertEqual(response.status_code, 200)
        self.assertIn("title", response.context["form"].errors)

    def test_title_clashing_with_existing_slug_is_rejected(self):
        response = self.client.post("/admin/article/new", self.article_payload(title="Owner Article!"))

        self.assertEqual(response.status_code, 200)
        self.assertIn("similar title", str(response.context["form"].errors["title"]))
        self.assertEqual(Article.objects.filter(slug="owner-article").count(), 1)

    def test_empty_post_shows_required_field_errors(self):
        response = self.client.post("/admin/article/new", {})

        self.assertEqual(response.status_code, 200)
        form = response.context["form"]
        self.assertTrue(form.is_bound)
        self.assertIn("title", form.errors)
        self.assertIn("category", form.errors)

    def test_non_latin_title_is_transliterated(self):
        response = self.client.post("/admin/article/new", self.article_payload(title="Привет мир"))

        self.assertRedirects(response, "/admin/article", fetch_redirect_response=False)
        article = Article.objects.get(title="Привет мир")
        self.assertEqual(article.slug, "privet-mir")

    def test_non_image_upload_is_rejected(self):
        bogus = SimpleUploadedFile("notes.png", b"not an image", content_type="image/png")
        response = self.client.post("/admin/article/new", self.article_payload(image_file=bogus))

        self.assertEqual(response.status_code, 200)
        self.assertIn("image_file", response.context["form"].errors)
        self.assertEqual(self.stored_images(), [])


class AdminEditTests(AdminArticleTestCase):
    def test_get_renders_bound_to_article(self):
        response = self.client.get(f"/admin/article/{self.article.pk}/edit")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.context["form"].instance, self.article)

    def test_edit_recomputes_slug_and_keeps_author_and_date(self):
        created_at = self.article.created_at
        response = self.client.post(
            f"/admin/article/{self.article.pk}/edit",
            self.article_payload(title="Renamed Article"),
            follow=True,
        )

        self.assertRedirects(response, "/admin/article")
        self.assertContains(response, "Article updated.")
        self.article.refresh_from_db()
        self.assertEqual(self.article.title, "Renamed Article")
        self.assertEqual(self.article.slug, "renamed-article")
        self.assertEqual(self.article.author, self.owner)
        self.assertEqual(self.article.created_at, created_at)

    def test_edit_keeping_title_does_not_clash_with_itself(self):
        response = self.client.post(
            f"/admin/article/{self.article.pk}/edit",
            self.article_payload(title="Owner article", content="New body"),
        )

        self.assertRedirects(response, "/admin/article", fetch_redirect_response=False)
        self.article.refresh_from_db()
        self.assertEqual(self.article.content, "New body")

    def test_new_image_replaces_and_removes_old_file(self):
        old = self.write_image("old-cover-0000000000000.png")
        Article.objects.filter(pk=self.article.pk).update(image=old)

        with self.captureOnCommitCallbacks(execute=True):
            self.client.post(
                f"/admin/article/{self.article.pk}/edit",
                self.article_payload(title="Owner article", image_file=make_image_upload("new.png")),
            )

        self.article.refresh_from_db()
        self.assertRegex(self.article.image, r"^new-[0-9a-f]{13}\.png$")
        self.assertFalse(self.image_exists(old))
        self.assertEqual(self.stored_images(), [self.article.image])

    def test_edit_without_new_image_keeps_existing_file(self):
        old = self.write_image("keep-0000000000000.png")
        Article.objects.filter(pk=self.article.pk).update(image=old)

        with self.captureOnCommitCallbacks(execute=True):
            self.client.post(
                f"/admin/article/{self.article.pk}/edit",
                self.article_payload(title="Owner article"),
            )

        self.article.refresh_from_db()
        self.assertEqual(self.article.image, old)
        self.assertTrue(self.image_exists(old))

    def test_failed_image_move_keeps_previous_image(self):
        old = self.write_image("keep-0000000000000.png")
        Article.objects.filter(pk=self.article.pk).update(image=old)

        with mock.patch.object(FileSystemStorage, "save", side_effect=OSError("read-only")):
            with self.captureOnCommitCallbacks(execute=True):
                response = self.client.post(
                    f"/admin/article/{self.article.pk}/edit",
                    self.article_payload(title="Owner article v2", image_file=make_image_upload()),
                    follow=True,
                )

        self.assertContains(response, "The image could not be uploaded.")
        self.article.refresh_from_db()
        self.assertEqual(self.article.title, "Owner article v2")
        self.assertEqual(self.article.image, old)
        self.assertTrue(self.image_exists(old))

    def test_invalid_edit_renders_stored_article(self):
        response = self.client.post(
            f"/admin/article/{self.article.pk}/edit",
            self.article_payload(title="Half edited", category=999999),
        )

        self.assertEqual(response.status_code, 200)
        self.assertIn("category", response.context["form"].errors)
        self.assertEqual(response.context["article"].title, "Owner article")
        self.assertContains(response, "<title>Edit Owner article", html=False)
        self.article.refresh_from_db()
        self.assertEqual(self.article.title, "Owner article")

    def test_non_author_cannot_edit(self):
        before = Article.objects.values().get(pk=self.foreign.pk)

        response = self.client.post(
            f"/admin/article/{self.foreign.pk}/edit",
            self.article_payload(title="Hijacked", image_file=make_image_upload()),
            follow=True,
        )

        self.assertRedirects(response, "/admin/article")
        self.assertContains(response, "You cannot edit this article.")
        self.assertEqual(Article.objects.values().get(pk=self.foreign.pk), before)
        self.assertEqual(self.stored_images(), [])

    def test_non_author_cannot_open_edit_form(self):
        response = self.client.get(f"/admin/article/{self.foreign.pk}/edit")
        self.assertRedirects(response, "/admin/article", fetch_redirect_response=False)

    def test_unknown_article_is_404(self):
        response = self.client.get("/admin/article/999999/edit")
        self.assertEqual(response.status_code, 404)


class AdminDeleteTests(AdminArticleTestCase):
    def delete(self, article, token=None, follow=False):
        data = {} if token is None else {"_token": token}
        return self.client.post(f"/admin/article/{article.pk}", data, follow=follow)

    def test_delete_with_valid_token_removes_article(self):
        with self.captureOnCommitCallbacks(execute=True):
            response = self.delete(self.article, delete_token_for(self.client, self.article), follow=True)

        self.assertRedirects(response, "/admin/article")
        self.assertContains(response, "Article deleted.")
        self.assertFalse(Article.objects.filter(pk=self.article.pk).exists())

    def test_delete_removes_image_file(self):
        image = self.write_image("cover-0000000000000.png")
        Article.objects.filter(pk=self.article.pk).update(image=image)
        self.article.refresh_from_db()

        with self.captureOnCommitCallbacks(execute=True):
            self.delete(self.article, delete_token_for(self.client, self.article))

        self.assertFalse(Article.objects.filter(pk=self.article.pk).exists())
        self.assertFalse(self.image_exists(image))

    def test_delete_without_image_touches_no_files(self):
        with mock.patch.object(ArticleImageStore, "delete") as delete_file:
            with self.captureOnCommitCallbacks(execute=True):
                self.delete(self.article, delete_token_for(self.client, self.article))

        self.assertFalse(Article.objects.filter(pk=self.article.pk).exists())
        delete_file.assert_not_called()

    def test_missing_token_is_a_silent_no_op(self):
        response = self.delete(self.article, follow=True)

        self.assertRedirects(response, "/admin/article")
        self.assertNotContains(response, "Article deleted.")
        self.assertTrue(Article.objects.filter(pk=self.article.pk).exists())

    def test_wrong_token_is_a_silent_no_op(self):
        self.delete(self.article, "not-the-token")
        self.assertTrue(Article.objects.filter(pk=self.article.pk).exists())

    def test_token_for_another_article_is_rejected(self):
        other = create_article(self.owner, self.categories["News"], "Second owner article", minutes=2)

        self.delete(self.article, delete_token_for(self.client, other))

        self.assertTrue(Article.objects.filter(pk=self.article.pk).exists())

    def test_non_author_cannot_delete(self):
        image = self.write_image("foreign-0000000000000.png")
        Article.objects.filter(pk=self.foreign.pk).update(image=image)
        self.foreign.refresh_from_db()

        with self.captureOnCommitCallbacks(execute=True):
            response = self.delete(self.foreign, delete_token_for(self.client, self.foreign), follow=True)

        self.assertRedirects(response, "/admin/article")
        self.assertContains(response, "You cannot delete this article.")
        self.assertTrue(Article.objects.filter(pk=self.foreign.pk).exists())
        self.assertTrue(self.image_exists(image))

    def test_delete_requires_post(self):
        response = self.client.get(f"/admin/article/{self.article.pk}")
        self.assertEqual(response.status_code, 405)
        self.assertTrue(Article.objects.filter(pk=self.article.pk).exists())

    def test_unknown_article_is_404(self):
        response = self.client.post("/admin/article/999999", {"_token": "x"})
        self.assertEqual(response.status_code, 404)
