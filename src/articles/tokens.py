"""Per-article anti-forgery tokens for state-changing back-office actions.

Django's CSRF middleware already guards every POST; these tokens add the
per-action check the delete form carries in its ``_token`` field, so a
token issued for one article cannot delete another.
"""

from django.utils.crypto import constant_time_compare, salted_hmac

DELETE_TOKEN_SALT = "articles.tokens.delete"


def _session_key(request) -> str:
    session = request.session
    if session.session_key is None:
        session.save()
    return session.session_key


def make_delete_token(request, article) -> str:
    """Token bound to this session and to the id of ``article``."""
    value = f"delete{article.pk}:{_session_key(request)}"
    return salted_hmac(DELETE_TOKEN_SALT, value, algorithm="sha256").hexdigest()


def is_delete_token_valid(request, article, token: str | None) -> bool:
    if not token:
        return False
    return constant_time_compare(token, make_delete_token(request, article))


__all__ = ["make_delete_token", "is_delete_token_valid"]
