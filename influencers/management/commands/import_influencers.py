"""
Django management command to import influencers with English/French content.

Reads influencers-data.json (or a YAML file with the same shape), creates one
Influencer per locale, and links the translations through a shared document id.
Existing slugs are skipped, so the command can be re-run safely.

Usage:
    python manage.py import_influencers
    python manage.py import_influencers ./influencers-data.json --dry-run
    DRY_RUN=true python manage.py import_influencers
"""

import traceback
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from influencers.exceptions import FatalStartupError, StorageError
from influencers.importer import ImportConfig, InfluencerImporter, load_source_file
from influencers.reporting import Reporter
from influencers.storage import open_store
from influencers.verification import count_by_locale


def option_or_setting(value, default):
    """An explicit option wins, even an empty one; None falls back to the setting."""
    return default if value is None else value


class Command(BaseCommand):
    help = 'Import influencer data with i18n support into the CMS'

    def add_arguments(self, parser):
        parser.add_argument(
            'data_file',
            nargs='?',
            type=str,
            help='JSON or YAML file with an "influencers" list (default: INFLUENCERS_DATA_FILE)'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Validate and report without writing to the database'
        )
        parser.add_argument(
            '--publish',
            action='store_true',
            help='Publish created entries instead of leaving them as drafts'
        )
        parser.add_argument(
            '--primary-locale',
            type=str,
            help='Locale every influencer must have (default: INFLUENCERS_PRIMARY_LOCALE)'
        )
        parser.add_argument(
            '--secondary-locale',
            type=str,
            help='Optional second locale to link, "" to disable (default: INFLUENCERS_SECONDARY_LOCALE)'
        )
        parser.add_argument(
            '--verbose',
            action='store_true',
            help='Show detailed progress and tracebacks'
        )

    def handle(self, *args, **options):
        data_file = Path(options['data_file'] or settings.INFLUENCERS_DATA_FILE)
        verbose = options['verbose']
        config = ImportConfig(
            primary_locale=options['primary_locale'] or settings.INFLUENCERS_PRIMARY_LOCALE,
            secondary_locale=option_or_setting(options['secondary_locale'], settings.INFLUENCERS_SECONDARY_LOCALE),
            dry_run=options['dry_run'] or settings.INFLUENCERS_DRY_RUN,
            auto_publish=options['publish'] or settings.INFLUENCERS_AUTO_PUBLISH,
            debug=verbose or settings.INFLUENCERS_DEBUG,
        )
        reporter = Reporter(self.stdout, self.style, verbose=verbose, dry_run=config.dry_run)

        reporter.heading("Influencer Data Import")
        if config.dry_run:
            reporter.warning("⚠️  DRY RUN MODE - No data will be written\n")

        try:
            reporter.progress(f"Reading influencers data from {data_file}...")
            records = load_source_file(data_file)
            reporter.success(f"✓ Loaded {len(records)} influencers\n")

            with open_store() as store:
                importer = InfluencerImporter(store, config, reporter)
                stats = importer.run(records)

                self.stdout.write(stats.summary())

                if not config.dry_run:
                    self.report_database_state(store, config, importer.secondary_enabled)

        except (FatalStartupError, StorageError) as e:
            self.stdout.write(self.style.ERROR(f"\n❌ Fatal error during import: {e}"))
            if config.debug:
                self.stdout.write(traceback.format_exc())
            raise CommandError(str(e))

        if stats.has_failures:
            raise CommandError(
                f"Import completed with {stats.failed} failed record(s). Check logs above.",
                returncode=1,
            )

        self.stdout.write(self.style.SUCCESS(
            f"\n{'[DRY RUN] ' if config.dry_run else ''}✨ Import completed successfully!"
        ))

    def report_database_state(self, store, config: ImportConfig, include_secondary: bool):
        """Print what is stored now that the import has run."""
        self.stdout.write("\n🔍 Verifying import...")
        locales = [config.primary_locale]
        if include_secondary:
            locales.append(config.secondary_locale)

        counts = count_by_locale(store, locales)
        self.stdout.write(f"✓ Total entries in database: {counts['total']}")
        for code in locales:
            self.stdout.write(f"✓ {code} entries: {counts[code]}")
        self.stdout.write(
            f"✓ Entries with localizations: {store.count_linked(config.primary_locale)}"
        )
