"""
Headless preview links.

The client site renders drafts itself; the CMS only needs to know which
client path shows a given document. Routes are keyed by model label
(``app_label.modelname``) and formatted with the document's ``slug``/``url``.
"""

from urllib.parse import urlencode

from django.conf import settings


def _document_value(document, key):
    if isinstance(document, dict):
        return document.get(key) or ''
    return getattr(document, key, '') or ''


def get_preview_pathname(model_label, document, status, secret, routes=None):
    """
    Client path (with query string) previewing ``document``, or None when
    the content type has no preview route.
    """
    if routes is None:
        routes = settings.PREVIEW_ROUTES

    template = routes.get(model_label.lower())
    if template is None:
        return None

    path = template.format(
        slug=_document_value(document, 'slug'),
        url=_document_value(document, 'url'),
    )
    query = urlencode({'status': status, 'secret': secret})
    return f"{path}?{query}"


def build_preview_url(model_label, document, status='draft'):
    """Absolute client URL for the preview, or None."""
    pathname = get_preview_pathname(model_label, document, status, settings.PREVIEW_SECRET)
    if pathname is None:
        return None
    return f"{settings.CLIENT_URL.rstrip('/')}{pathname}"
