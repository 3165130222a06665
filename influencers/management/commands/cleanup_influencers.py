"""
Management command to remove every influencer entry.

USE WITH CAUTION - this cannot be undone. Asks for the word DELETE unless
--force (or FORCE=true) is given.

Usage:
    python manage.py cleanup_influencers
    python manage.py cleanup_influencers --dry-run
    FORCE=true python manage.py cleanup_influencers
"""

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from influencers.cleanup import CONFIRMATION_WORD, InfluencerSweep, is_confirmed
from influencers.exceptions import StorageError
from influencers.reporting import Reporter
from influencers.storage import open_store


class Command(BaseCommand):
    help = 'Delete all influencer entries (all locales)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--force',
            action='store_true',
            help='Skip the interactive confirmation'
        )
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List what would be deleted without deleting'
        )

    def handle(self, *args, **options):
        force = options['force'] or settings.INFLUENCERS_FORCE
        dry_run = options['dry_run']

        self.stdout.write(self.style.WARNING("\n⚠️  CLEANUP - DANGER ZONE ⚠️\n"))

        if not force and not dry_run:
            try:
                answer = input(
                    f'This will DELETE ALL influencer entries. Type "{CONFIRMATION_WORD}" to confirm: '
                )
            except (EOFError, KeyboardInterrupt):
                # Closed stdin or Ctrl-C is a refusal
                answer = ''
                self.stdout.write('')
            if not is_confirmed(answer):
                self.stdout.write(f'❌ Aborted. (You must type "{CONFIRMATION_WORD}" to confirm)')
                return

        self.stdout.write("\n🧹 Starting cleanup...\n")

        try:
            with open_store() as store:
                InfluencerSweep(store, Reporter(self.stdout, self.style, dry_run=dry_run), dry_run=dry_run).run()
        except StorageError as e:
            self.stdout.write(self.style.ERROR(f"\n❌ Cleanup failed: {e}"))
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS("✅ Cleanup completed"))
