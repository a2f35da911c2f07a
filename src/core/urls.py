"""Root URL configuration for the Inkwell blog."""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView

urlpatterns = [
    path("backoffice/", admin.site.urls),
    path("", include("authentication.urls")),
    path("api/", include("articles.api_urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="api-schema"),
    path("", include("articles.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.ARTICLE_IMAGES_URL, document_root=settings.ARTICLE_IMAGES_DIR)
