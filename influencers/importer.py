"""
Influencer import: map the flat JSON export onto localized Influencer rows.

Source shape (one entry of the top-level ``influencers`` list):

    {
        "slug": "unchained",
        "name": "Unchained",
        "discount": {"code": "UNCHAINED15", "percentage": 15},
        "metadata": {"title": "...", "description": "..."},
        "translations": {
            "en": {
                "shortBio": "...", "heroText": "...", "heroDescription": "...",
                "influencerSection": {"ctaLink": "...", "bulletItems": ["...", ...]}
            },
            "fr": {...}
        }
    }

Each source record becomes a primary-locale row and, when the secondary
locale is configured and translated, a second row sharing its document id.
Records whose slug already exists are skipped, never merged.
"""

import json
import logging
import traceback
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from django.utils import timezone

from influencers.exceptions import FatalStartupError, RecordValidationError
from influencers.models import BULLET_POINT_COUNT
from influencers.reporting import Reporter


logger = logging.getLogger(__name__)

SUMMARY_ERROR_LIMIT = 10

# Percentages are stored to the cent
PERCENTAGE_PLACES = Decimal('0.01')


@dataclass
class ImportConfig:
    primary_locale: str = 'en'
    secondary_locale: Optional[str] = 'fr'
    dry_run: bool = False
    auto_publish: bool = False
    debug: bool = False


class ImportStats:
    """Track import statistics for reporting."""

    def __init__(self, total: int = 0):
        self.total = total
        self.imported = 0
        self.skipped = 0
        self.failed = 0
        self.errors: List[str] = []

    def record_imported(self):
        self.imported += 1

    def record_skipped(self):
        self.skipped += 1

    def record_failure(self, message: str):
        self.failed += 1
        self.errors.append(message)

    @property
    def has_failures(self) -> bool:
        return self.failed > 0

    def as_dict(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'imported': self.imported,
            'skipped': self.skipped,
            'failed': self.failed,
            'errors': list(self.errors),
        }

    def summary(self) -> str:
        """Generate a summary report."""
        lines = []
        lines.append("\n=== Import Summary ===")
        lines.append(f"Total processed:          {self.total}")
        lines.append(f"✓ Successfully imported:  {self.imported}")
        lines.append(f"⚠️  Skipped (existing):    {self.skipped}")
        lines.append(f"✗ Failed:                 {self.failed}")

        if self.errors:
            lines.append(f"\nErrors: {len(self.errors)}")
            for error in self.errors[:SUMMARY_ERROR_LIMIT]:
                lines.append(f"  - {error}")
            if len(self.errors) > SUMMARY_ERROR_LIMIT:
                lines.append(f"  ... and {len(self.errors) - SUMMARY_ERROR_LIMIT} more")

        return "\n".join(lines)


# =============================================================================
# Source loading
# =============================================================================

def load_source_file(path: Path) -> List[Dict]:
    """
    Read the ``influencers`` list from a JSON (or YAML) export.

    Raises FatalStartupError when the file is missing, unparsable, or does not
    contain a non-empty ``influencers`` list.
    """
    path = Path(path)
    if not path.exists():
        raise FatalStartupError(f"File not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in ('.yaml', '.yml'):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise FatalStartupError(f"Error loading {path}: {e}") from e

    influencers = data.get('influencers') if isinstance(data, dict) else None
    if not isinstance(influencers, list) or not influencers:
        raise FatalStartupError('Invalid data: "influencers" array is empty or missing')

    return influencers


# =============================================================================
# Record mapping
# =============================================================================

def flatten_bullet_items(items) -> Dict[str, str]:
    """Spread up to four bullet items over bullet_point_1..4, padding with ''."""
    items = list(items or [])
    fields = {}
    for i in range(BULLET_POINT_COUNT):
        value = items[i] if i < len(items) else ''
        fields[f'bullet_point_{i + 1}'] = value or ''
    return fields


def parse_percentage(value) -> Decimal:
    """Coerce a source percentage to a Decimal rounded to the cent."""
    if value in (None, ''):
        return Decimal('0')
    if isinstance(value, bool):
        raise RecordValidationError(f"Invalid discount percentage: {value!r}")
    try:
        percentage = Decimal(str(value))
    except InvalidOperation:
        raise RecordValidationError(f"Invalid discount percentage: {value!r}")
    if not percentage.is_finite():
        raise RecordValidationError(f"Invalid discount percentage: {value!r}")
    return percentage.quantize(PERCENTAGE_PLACES, rounding=ROUND_HALF_UP)


def build_metadata(record: Dict, translation: Dict) -> Optional[Dict[str, str]]:
    """SEO metadata, or None when the source record carries no metadata block."""
    metadata = record.get('metadata')
    if metadata is None:
        return None
    return {
        'meta_title': metadata.get('title') or record.get('name') or '',
        'meta_description': metadata.get('description') or translation.get('shortBio') or '',
    }


def build_locale_data(record: Dict, translation: Dict, published_at=None) -> Dict[str, Any]:
    """
    Flatten one source record plus one of its translation blocks into the
    field values of a single Influencer row.
    """
    discount = record.get('discount') or {}
    section = translation.get('influencerSection') or {}

    data = {
        # Shared across locales
        'slug': record['slug'],
        'name': record['name'],
        'code': discount.get('code') or '',
        'percentage': parse_percentage(discount.get('percentage')),

        # Localized
        'short_bio': translation.get('shortBio') or '',
        'hero_text': translation.get('heroText') or '',
        'hero_description': translation.get('heroDescription') or '',
        'link': section.get('ctaLink') or '',
        'metadata': build_metadata(record, translation),
        'published_at': published_at,
    }
    data.update(flatten_bullet_items(section.get('bulletItems')))
    return data


def validate_record(record, primary_locale: str):
    if not isinstance(record, dict):
        raise RecordValidationError("Record is not an object")
    if not record.get('slug') or not record.get('name'):
        raise RecordValidationError("Missing required fields: slug or name")
    translations = record.get('translations')
    if not isinstance(translations, dict) or not isinstance(translations.get(primary_locale), dict):
        raise RecordValidationError(f"Missing {primary_locale} translation")


def record_label(record) -> str:
    if isinstance(record, dict):
        return record.get('name') or record.get('slug') or '<unnamed>'
    return '<invalid>'


# =============================================================================
# Import procedure
# =============================================================================

class InfluencerImporter:
    """
    Reconcile a list of source records against the influencer collection.

    The store is injected; see influencers.storage.InfluencerStore for the
    methods it must provide.
    """

    def __init__(self, store, config: ImportConfig = None, reporter: Reporter = None):
        self.store = store
        self.config = config or ImportConfig()
        self.reporter = reporter or Reporter(dry_run=self.config.dry_run)
        self.secondary_enabled = False
        self.planned_slugs = set()

    def check_locales(self):
        """Fail fast when the primary locale is missing; note a missing secondary."""
        self.reporter.progress("Verifying locales...")
        available = self.store.locale_codes()

        if self.config.primary_locale not in available:
            raise FatalStartupError(
                f'Default locale "{self.config.primary_locale}" not found in the CMS!'
            )

        secondary = self.config.secondary_locale
        self.secondary_enabled = bool(secondary) and secondary in available
        if secondary and not self.secondary_enabled:
            self.reporter.warning(
                f'⚠️  Secondary locale "{secondary}" not found - will skip {secondary} translations'
            )

        self.reporter.info(f"Available locales: {', '.join(available)}")

    def run(self, records: List[Dict]) -> ImportStats:
        """Import every record in input order and return the statistics."""
        if not records:
            raise FatalStartupError('Invalid data: "influencers" array is empty or missing')

        self.check_locales()

        stats = ImportStats(total=len(records))
        self.planned_slugs = set()

        self.reporter.write()
        self.reporter.heading("Starting Import Process")

        for index, record in enumerate(records, start=1):
            self.import_record(index, record, stats)

        return stats

    def import_record(self, index: int, record: Dict, stats: ImportStats):
        progress = f"{index}/{stats.total}"
        label = record_label(record)
        slug = record.get('slug') if isinstance(record, dict) else None

        self.reporter.write(f"[{progress}] Processing: {label} ({slug})")

        try:
            validate_record(record, self.config.primary_locale)

            existing = self.store.find_one(slug=slug)
            if existing is not None:
                self.reporter.warning(f"  ⚠️  Already exists (ID: {existing.pk}), skipping...")
                stats.record_skipped()
                return

            if self.config.dry_run:
                if slug in self.planned_slugs:
                    self.reporter.warning("  ⚠️  Already planned earlier in this batch, skipping...")
                    stats.record_skipped()
                    return
                self.planned_slugs.add(slug)
                self.reporter.write("  [DRY RUN] Would create entries")
                stats.record_imported()
                return

            with self.store.atomic():
                self.create_localized_entries(record)

        except Exception as e:
            message = f"{progress} {label}: {e}"
            stats.record_failure(message)
            logger.warning("Influencer import failed: %s", message)
            self.reporter.error(f"  ❌ Failed: {e}")
            if self.config.debug:
                self.reporter.write(traceback.format_exc())
            return

        stats.record_imported()
        self.reporter.success("  ✅ Success!")

    def create_localized_entries(self, record: Dict):
        primary_locale = self.config.primary_locale
        published_at = timezone.now() if self.config.auto_publish else None
        translations = record['translations']

        primary = self.store.create(
            build_locale_data(record, translations[primary_locale], published_at),
            locale=primary_locale,
        )
        self.reporter.write(f"  ✓ Created {primary_locale} entry (ID: {primary.document_id})")

        secondary_locale = self.config.secondary_locale
        secondary_translation = translations.get(secondary_locale) if secondary_locale else None
        if not (self.secondary_enabled and isinstance(secondary_translation, dict)):
            self.reporter.detail(f"No {secondary_locale} translation to create")
            return primary, None

        secondary = self.store.create(
            build_locale_data(record, secondary_translation, published_at),
            locale=secondary_locale,
            document_id=primary.document_id,
        )
        self.reporter.write(
            f"  ✓ Created {secondary_locale} localization (same documentId: {secondary.document_id})"
        )
        return primary, secondary
