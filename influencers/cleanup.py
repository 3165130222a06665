"""
Bulk deletion sweep over the influencer collection.

Rows are deleted one at a time so a single failure is logged and skipped
instead of aborting the sweep. Confirmation is the caller's job; see the
cleanup_influencers command.
"""

import logging

from influencers.exceptions import StorageError
from influencers.reporting import Reporter


logger = logging.getLogger(__name__)

CONFIRMATION_WORD = 'DELETE'


def is_confirmed(answer) -> bool:
    """Only the exact word DELETE confirms the sweep."""
    return (answer or '').strip() == CONFIRMATION_WORD


class SweepResult:

    def __init__(self, total: int = 0):
        self.total = total
        self.deleted = 0
        self.failures = []
        self.remaining = None

    @property
    def is_clean(self) -> bool:
        return self.remaining == 0


class InfluencerSweep:
    """Delete every influencer row, then recount."""

    def __init__(self, store, reporter: Reporter = None, dry_run: bool = False):
        self.store = store
        self.reporter = reporter or Reporter(dry_run=dry_run)
        self.dry_run = dry_run

    def run(self) -> SweepResult:
        entries = self.store.find_many()
        result = SweepResult(total=len(entries))

        self.reporter.write(f"Found {result.total} entries to delete\n")
        if not entries:
            self.reporter.success("✓ No entries to delete. Database is already clean.")
            result.remaining = 0
            return result

        if self.dry_run:
            for entry in entries:
                self.reporter.write(
                    f"[DRY RUN] Would delete: {entry.name} (ID: {entry.pk}, locale: {entry.locale_code})"
                )
            result.remaining = result.total
            return result

        for entry in entries:
            try:
                self.store.delete(entry.pk)
            except StorageError as e:
                result.failures.append(f"ID {entry.pk}: {e}")
                logger.warning("Failed to delete influencer %s: %s", entry.pk, e)
                self.reporter.error(f"✗ Failed to delete ID {entry.pk}: {e}")
                continue
            result.deleted += 1
            self.reporter.write(f"✓ Deleted: {entry.name} (ID: {entry.pk}, locale: {entry.locale_code})")

        self.reporter.rule()
        self.reporter.success(f"✓ Cleanup complete! Deleted {result.deleted}/{result.total} entries")
        self.reporter.rule()

        result.remaining = self.store.count()
        if result.remaining == 0:
            self.reporter.success("✅ Database is clean - no influencer entries remain")
        else:
            logger.warning("%s influencer entries remain after cleanup", result.remaining)
            self.reporter.warning(f"⚠️  Warning: {result.remaining} entries still remain in database")

        return result
