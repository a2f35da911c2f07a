"""URL patterns for authentication pages."""

from django.contrib.auth.views import LogoutView
from django.urls import path

from .views import EmailLoginView, register

urlpatterns = [
    path("login/", EmailLoginView.as_view(), name="login"),
    path("logout/", LogoutView.as_view(), name="logout"),
    path("register/", register, name="register"),
]
