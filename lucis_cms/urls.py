"""
URL configuration for Lucis CMS.
"""

from django.apps import apps
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.contrib.admin.views.decorators import staff_member_required
from django.http import Http404, JsonResponse
from django.shortcuts import get_object_or_404, redirect
from django.urls import path, include

from wagtail.admin import urls as wagtailadmin_urls
from wagtail import urls as wagtail_urls
from wagtail.documents import urls as wagtaildocs_urls

from lucis_cms.preview import build_preview_url


def health_check(request):
    """Simple health check endpoint."""
    return JsonResponse({'status': 'ok'})


def influencer_diagnostics(request):
    """Diagnostic endpoint to check influencer import status."""
    from influencers.storage import InfluencerStore
    from influencers.verification import count_by_locale

    data_file = settings.INFLUENCERS_DATA_FILE
    store = InfluencerStore()
    locales = store.locale_codes()

    return JsonResponse({
        'data_file': str(data_file),
        'data_file_exists': data_file.exists(),
        'locales': locales,
        'counts': count_by_locale(store, locales),
        'linked': store.count_linked(settings.INFLUENCERS_PRIMARY_LOCALE),
    })


@staff_member_required
def preview_redirect(request, model_label, pk):
    """Send an editor to the client-side preview of a document."""
    try:
        model = apps.get_model(model_label)
    except (LookupError, ValueError):
        raise Http404(f"Unknown content type: {model_label}")

    document = get_object_or_404(model, pk=pk)
    url = build_preview_url(model_label, document, status=request.GET.get('status', 'draft'))
    if url is None:
        raise Http404(f"No preview route for {model_label}")
    return redirect(url)


urlpatterns = [
    path('health/', health_check, name='health_check'),
    path('diagnostics/influencers/', influencer_diagnostics, name='influencer_diagnostics'),
    path('preview/<str:model_label>/<int:pk>/', preview_redirect, name='preview_redirect'),
    path('django-admin/', admin.site.urls),
    path('admin/', include(wagtailadmin_urls)),
    path('documents/', include(wagtaildocs_urls)),

    # Wagtail page serving (catch-all, must be last)
    path('', include(wagtail_urls)),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
