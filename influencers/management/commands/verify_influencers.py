"""
Management command to verify an influencer import.

Prints per-locale counts, inspects one sample influencer and its translation,
and fails (exit code 1) when any check does not pass.

Usage:
    python manage.py verify_influencers
    python manage.py verify_influencers --slug unchained
"""

import traceback

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from influencers.exceptions import StorageError
from influencers.reporting import Reporter
from influencers.storage import open_store
from influencers.verification import InfluencerVerifier


class Command(BaseCommand):
    help = 'Verify imported influencer data, bullet point mapping and i18n links'

    def add_arguments(self, parser):
        parser.add_argument(
            '--slug',
            type=str,
            help='Sample influencer to inspect (default: INFLUENCERS_VERIFY_SAMPLE_SLUG)'
        )
        parser.add_argument(
            '--primary-locale',
            type=str,
            help='Default: INFLUENCERS_PRIMARY_LOCALE'
        )
        parser.add_argument(
            '--secondary-locale',
            type=str,
            help='Default: INFLUENCERS_SECONDARY_LOCALE'
        )

    def handle(self, *args, **options):
        secondary_locale = options['secondary_locale']
        if secondary_locale is None:
            secondary_locale = settings.INFLUENCERS_SECONDARY_LOCALE
        if not secondary_locale:
            raise CommandError("Verification compares two locales; set --secondary-locale")

        reporter = Reporter(self.stdout, self.style)
        reporter.heading("🔍 Influencer Data Verification")

        try:
            with open_store() as store:
                verifier = InfluencerVerifier(
                    store,
                    primary_locale=options['primary_locale'] or settings.INFLUENCERS_PRIMARY_LOCALE,
                    secondary_locale=secondary_locale,
                    sample_slug=options['slug'] or settings.INFLUENCERS_VERIFY_SAMPLE_SLUG,
                    reporter=reporter,
                )
                result = verifier.run()
        except StorageError as e:
            self.stdout.write(self.style.ERROR(f"\n❌ Verification failed: {e}"))
            if settings.INFLUENCERS_DEBUG:
                self.stdout.write(traceback.format_exc())
            raise CommandError(str(e))

        if not result.success:
            raise CommandError(
                f"{result.failed} check(s) failed. Review above for details.",
                returncode=1,
            )

        self.stdout.write(self.style.SUCCESS("\n✨ All verification checks passed! ✨"))
