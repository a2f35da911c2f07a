"""Authentication pages: login, logout, and registration."""

import logging

from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.views import LoginView
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods

from .forms import EmailAuthenticationForm, RegisterForm

logger = logging.getLogger(__name__)


class EmailLoginView(LoginView):
    """Session login with email + password."""

    form_class = EmailAuthenticationForm
    template_name = "authentication/login.html"
    redirect_authenticated_user = True


@require_http_methods(["GET", "POST"])
def register(request):
    """Create an account and sign the new author in."""
    if request.user.is_authenticated:
        return redirect("admin_article_index")

    form = RegisterForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        user = form.save()
        login(request, user, backend="django.contrib.auth.backends.ModelBackend")
        logger.info("Registered user %s", user.pk)
        messages.success(request, "Welcome! Your account has been created.")
        return redirect("admin_article_index")

    return render(request, "authentication/register.html", {"form": form})
