"""
Storage access for the influencer collection.

The maintenance procedures never touch the ORM directly; they receive an
``InfluencerStore`` (or a test double with the same methods) and talk to it
in terms of locale codes, slugs and document ids.

Usage:
    with open_store() as store:
        InfluencerImporter(store, config).run(records)
"""

import logging
from contextlib import contextmanager
from typing import Dict, List, Optional

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from wagtail.models import Locale

from influencers.exceptions import StorageError
from influencers.models import Influencer


logger = logging.getLogger(__name__)

# Filter names accepted by the store, mapped to ORM lookups
FILTER_LOOKUPS = {
    'id': 'pk',
    'slug': 'slug',
    'locale': 'locale__language_code',
    'document_id': 'translation_key',
}


class InfluencerStore:
    """Find/create/count/delete influencer rows keyed by locale, slug and document id."""

    def __init__(self):
        self.closed = False

    def _check_open(self):
        if self.closed:
            raise StorageError("Influencer store has been closed")

    def _queryset(self, filters: Dict):
        self._check_open()
        lookups = {}
        for key, value in filters.items():
            if key not in FILTER_LOOKUPS:
                raise StorageError(f"Unsupported filter: {key}")
            lookups[FILTER_LOOKUPS[key]] = value
        return Influencer.objects.select_related('locale').filter(**lookups)

    # =========================================================================
    # Locale registry
    # =========================================================================

    def locale_codes(self) -> List[str]:
        """Language codes configured in Wagtail, in creation order."""
        self._check_open()
        try:
            return list(Locale.objects.order_by('pk').values_list('language_code', flat=True))
        except DatabaseError as e:
            raise StorageError(f"Could not read locales: {e}") from e

    def get_locale(self, code: str) -> Optional[Locale]:
        self._check_open()
        try:
            return Locale.objects.filter(language_code=code).first()
        except DatabaseError as e:
            raise StorageError(f"Could not read locale '{code}': {e}") from e

    # =========================================================================
    # Reads
    # =========================================================================

    def find_one(self, **filters) -> Optional[Influencer]:
        try:
            return self._queryset(filters).first()
        except DatabaseError as e:
            raise StorageError(f"Lookup failed for {filters}: {e}") from e

    def find_many(self, **filters) -> List[Influencer]:
        try:
            return list(self._queryset(filters))
        except DatabaseError as e:
            raise StorageError(f"Query failed for {filters}: {e}") from e

    def count(self, **filters) -> int:
        try:
            return self._queryset(filters).count()
        except DatabaseError as e:
            raise StorageError(f"Count failed for {filters}: {e}") from e

    def count_linked(self, locale: str) -> int:
        """Count rows in ``locale`` that have at least one other-locale translation."""
        self._check_open()
        translated_keys = (
            Influencer.objects
            .exclude(locale__language_code=locale)
            .values('translation_key')
        )
        try:
            return Influencer.objects.filter(
                locale__language_code=locale,
                translation_key__in=translated_keys,
            ).count()
        except DatabaseError as e:
            raise StorageError(f"Could not count linked entries for {locale}: {e}") from e

    # =========================================================================
    # Writes
    # =========================================================================

    def create(self, data: Dict, locale: str, document_id: Optional[str] = None) -> Influencer:
        """
        Create one influencer row in ``locale``.

        Without ``document_id`` a new translation key is generated; passing the
        id of an existing row links the new row to it as a translation.
        """
        self._check_open()
        locale_obj = self.get_locale(locale)
        if locale_obj is None:
            raise StorageError(f"Locale '{locale}' is not configured")

        influencer = Influencer(locale=locale_obj, **data)
        if document_id:
            influencer.translation_key = document_id

        try:
            influencer.full_clean()
            influencer.save()
        except ValidationError as e:
            raise StorageError(self._format_validation_error(e)) from e
        except DatabaseError as e:
            raise StorageError(f"Could not save '{data.get('slug')}' ({locale}): {e}") from e

        logger.debug("Created influencer %s (%s) document_id=%s",
                     influencer.slug, locale, influencer.document_id)
        return influencer

    def delete(self, pk) -> int:
        """
        Delete a single row by primary key. Returns the number of influencer
        rows removed (0 or 1), not counting cascaded related rows.
        """
        self._check_open()
        try:
            _, per_model = Influencer.objects.filter(pk=pk).delete()
        except DatabaseError as e:
            raise StorageError(f"Could not delete ID {pk}: {e}") from e
        return per_model.get(Influencer._meta.label, 0)

    def atomic(self):
        """Transaction scope for a group of writes belonging to one record."""
        self._check_open()
        return transaction.atomic()

    def close(self):
        self.closed = True

    def _format_validation_error(self, error: ValidationError) -> str:
        if hasattr(error, 'message_dict'):
            parts = []
            for field, messages in sorted(error.message_dict.items()):
                parts.append(f"{field}: {' '.join(messages)}")
            return "; ".join(parts)
        return " ".join(error.messages)


@contextmanager
def open_store():
    """
    Acquire an InfluencerStore for the duration of a maintenance run.

    Wagtail's reference index auto-update and its logging are suspended while
    the store is open and restored on exit, whatever happens inside.
    """
    original_autoupdate = getattr(settings, 'WAGTAIL_REFERENCE_INDEX_AUTOUPDATE', True)
    settings.WAGTAIL_REFERENCE_INDEX_AUTOUPDATE = False

    wagtail_logger = logging.getLogger('wagtail')
    original_level = wagtail_logger.level
    wagtail_logger.setLevel(logging.ERROR)

    store = InfluencerStore()
    try:
        yield store
    finally:
        store.close()
        settings.WAGTAIL_REFERENCE_INDEX_AUTOUPDATE = original_autoupdate
        wagtail_logger.setLevel(original_level)
