"""Template tag rendering the per-article delete token."""

from django import template

from ..tokens import make_delete_token

register = template.Library()


@register.simple_tag(takes_context=True)
def delete_token(context, article) -> str:
    return make_delete_token(context["request"], article)
