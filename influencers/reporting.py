"""
Console narration for the influencer maintenance procedures.

Commands pass in their own ``stdout`` and ``style`` so the procedures print
the same way a management command does; without them output is discarded.
"""

from io import StringIO

from django.core.management.base import OutputWrapper
from django.core.management.color import no_style


RULE_WIDTH = 70


class Reporter:
    """Styled line writer with progress/info/detail levels."""

    def __init__(self, stdout=None, style=None, verbose: bool = False, dry_run: bool = False):
        if stdout is None:
            stdout = StringIO()
        if not isinstance(stdout, OutputWrapper):
            stdout = OutputWrapper(stdout)
        self.stdout = stdout
        self.style = style or no_style()
        self.verbose = verbose
        self.dry_run = dry_run

    def write(self, message: str = ''):
        self.stdout.write(message)

    def progress(self, message: str):
        """Log a progress message with emoji."""
        icon = "🔍" if self.dry_run else "⚙️"
        self.stdout.write(f"{icon} {message}")

    def info(self, message: str):
        self.stdout.write(f"ℹ️  {message}")

    def detail(self, message: str):
        """Only shown in verbose mode."""
        if self.verbose:
            self.stdout.write(f"  {message}")

    def success(self, message: str):
        self.stdout.write(self.style.SUCCESS(message))

    def warning(self, message: str):
        self.stdout.write(self.style.WARNING(message))

    def error(self, message: str):
        self.stdout.write(self.style.ERROR(message))

    def heading(self, title: str):
        self.stdout.write("=" * RULE_WIDTH)
        self.stdout.write(self.style.MIGRATE_HEADING(title))
        self.stdout.write("=" * RULE_WIDTH)

    def rule(self):
        self.stdout.write("=" * RULE_WIDTH)
