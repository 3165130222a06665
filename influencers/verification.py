"""
Read-only verification of an influencer import.

Counts rows per locale, deep-inspects one sample influencer in the primary
locale plus its secondary-locale counterpart, and evaluates a checklist.
"""

from typing import Dict

from influencers.reporting import Reporter


CORE_FIELDS = [
    'slug',
    'name',
    'code',
    'percentage',
    'hero_text',
    'hero_description',
    'link',
]

PREVIEW_LENGTH = 60


class VerificationResult:

    def __init__(self, checks: Dict[str, bool], counts: Dict[str, int], sample=None, counterpart=None):
        self.checks = checks
        self.counts = counts
        self.sample = sample
        self.counterpart = counterpart

    @property
    def success(self) -> bool:
        return bool(self.checks) and all(self.checks.values())

    @property
    def passed(self) -> int:
        return sum(1 for passed in self.checks.values() if passed)

    @property
    def failed(self) -> int:
        return len(self.checks) - self.passed

    def as_dict(self):
        return {'success': self.success, 'checks': dict(self.checks)}


def count_by_locale(store, locales) -> Dict[str, int]:
    """Per-locale counts for a list of locale codes, plus the total."""
    counts = {'total': store.count()}
    for code in locales:
        counts[code] = store.count(locale=code)
    return counts


def truncate(value, max_length: int = PREVIEW_LENGTH) -> str:
    value = value or ''
    if len(value) <= max_length:
        return value
    return value[:max_length] + '...'


class InfluencerVerifier:
    """Checklist-style verification; never writes."""

    def __init__(
        self,
        store,
        primary_locale: str = 'en',
        secondary_locale: str = 'fr',
        sample_slug: str = 'unchained',
        reporter: Reporter = None,
    ):
        self.store = store
        self.primary_locale = primary_locale
        self.secondary_locale = secondary_locale
        self.sample_slug = sample_slug
        self.reporter = reporter or Reporter()

    def run(self) -> VerificationResult:
        counts = self.collect_counts()
        self.print_counts(counts)

        sample = self.store.find_one(slug=self.sample_slug, locale=self.primary_locale)
        counterpart = None
        if sample is None:
            self.reporter.warning(
                f"⚠️  No sample influencer '{self.sample_slug}' ({self.primary_locale}) found. "
                "Database might be empty."
            )
        else:
            self.print_entry(sample, f"Sample Entry Verification ({sample.name} - {self.primary_locale})")
            counterpart = self.store.find_one(slug=self.sample_slug, locale=self.secondary_locale)
            if counterpart is not None:
                self.print_entry(counterpart, f"{self.secondary_locale} Localization Verification")

        checks = self.evaluate(counts, sample, counterpart)
        result = VerificationResult(checks, counts, sample=sample, counterpart=counterpart)
        self.print_checks(result)
        return result

    def collect_counts(self) -> Dict[str, int]:
        return count_by_locale(self.store, [self.primary_locale, self.secondary_locale])

    def evaluate(self, counts: Dict[str, int], sample, counterpart) -> Dict[str, bool]:
        primary = self.primary_locale
        secondary = self.secondary_locale
        return {
            'Total entries exist': counts['total'] > 0,
            f'{primary} entries exist': counts[primary] > 0,
            f'{secondary} entries exist': counts[secondary] > 0,
            f'{primary} and {secondary} counts match': counts[primary] == counts[secondary],
            'Sample has all required fields': self.has_core_fields(sample),
            'All 4 bullet points populated': bool(sample) and all(sample.bullet_points),
            'Metadata component exists': bool(sample) and bool(sample.metadata),
            f'{secondary} localization exists': counterpart is not None,
            f'DocumentIds match ({primary}/{secondary})': (
                sample is not None
                and counterpart is not None
                and sample.document_id == counterpart.document_id
            ),
        }

    def has_core_fields(self, entry) -> bool:
        if entry is None:
            return False
        return all(getattr(entry, field) for field in CORE_FIELDS)

    # =========================================================================
    # Output
    # =========================================================================

    def print_counts(self, counts: Dict[str, int]):
        self.reporter.write("📊 Database Statistics:")
        self.reporter.write(f"   Total entries: {counts['total']}")
        self.reporter.write(f"   {self.primary_locale}: {counts[self.primary_locale]}")
        self.reporter.write(f"   {self.secondary_locale}: {counts[self.secondary_locale]}")
        self.reporter.write()

    def print_entry(self, entry, title: str):
        self.reporter.heading(f"🔍 {title}")
        self.reporter.write(f"Name: {entry.name}")
        self.reporter.write(f"Slug: {entry.slug}")
        self.reporter.write(f"Locale: {entry.locale_code}")
        self.reporter.write(f"Document ID: {entry.document_id}")
        self.reporter.write("Discount:")
        self.reporter.write(f"   Code: {entry.code}")
        self.reporter.write(f"   Percentage: {entry.percentage}%")
        self.reporter.write("Localized Content:")
        self.reporter.write(f"   Short Bio: {truncate(entry.short_bio)}")
        self.reporter.write(f"   Hero Text: {entry.hero_text}")
        self.reporter.write(f"   Hero Description: {truncate(entry.hero_description)}")
        self.reporter.write(f"   Link: {entry.link}")
        self.reporter.write("Bullet Points:")
        for i, bullet in enumerate(entry.bullet_points, start=1):
            self.reporter.write(f"   {i}. {bullet}")
        if entry.metadata:
            self.reporter.write("Metadata (SEO):")
            self.reporter.write(f"   Title: {entry.metadata.get('meta_title', '')}")
            self.reporter.write(f"   Description: {truncate(entry.metadata.get('meta_description'))}")
        self.reporter.write()

    def print_checks(self, result: VerificationResult):
        self.reporter.heading("🧪 Validation Checks")
        for check, passed in result.checks.items():
            if passed:
                self.reporter.success(f"✅ {check}")
            else:
                self.reporter.error(f"❌ {check}")
        self.reporter.rule()
        self.reporter.write(f"📊 Results: {result.passed}/{len(result.checks)} checks passed")
        self.reporter.rule()
