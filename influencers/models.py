"""
Lucis CMS - Influencer content

One ``Influencer`` row exists per locale. Rows that describe the same person
share Wagtail's ``translation_key``, exposed here as ``document_id``. The
discount and identity fields (slug, name, code, percentage) are copied to
every locale as they arrive from the source data; only the copy fields
(bio, hero text, bullet points, SEO metadata) actually differ per language.
"""

from django.db import models

from wagtail.admin.panels import FieldPanel, FieldRowPanel, MultiFieldPanel
from wagtail.models import TranslatableMixin
from wagtail.search import index
from wagtail.snippets.models import register_snippet


BULLET_POINT_COUNT = 4


@register_snippet
class Influencer(TranslatableMixin, index.Indexed, models.Model):
    """
    A partner influencer landing page, in one language.

    Created by the import_influencers command, never updated in place.
    """
    slug = models.CharField(
        max_length=255,
        db_index=True,
        help_text="Client-side URL segment, identical across locales"
    )
    name = models.CharField(max_length=255)

    # Discount
    code = models.CharField(max_length=100, blank=True)
    percentage = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=0,
        help_text="Discount percentage offered with the code"
    )

    # Localized copy
    short_bio = models.TextField(blank=True)
    hero_text = models.CharField(max_length=255, blank=True)
    hero_description = models.TextField(blank=True)
    link = models.CharField(
        max_length=500,
        blank=True,
        help_text="Call-to-action link for the influencer section"
    )
    bullet_point_1 = models.CharField(max_length=255, blank=True)
    bullet_point_2 = models.CharField(max_length=255, blank=True)
    bullet_point_3 = models.CharField(max_length=255, blank=True)
    bullet_point_4 = models.CharField(max_length=255, blank=True)

    metadata = models.JSONField(
        null=True,
        blank=True,
        help_text="SEO metadata: {'meta_title': ..., 'meta_description': ...}"
    )

    published_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Empty while the entry is a draft"
    )

    # Metadata
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    panels = [
        MultiFieldPanel([
            FieldPanel('name'),
            FieldPanel('slug'),
            FieldRowPanel([
                FieldPanel('code'),
                FieldPanel('percentage'),
            ]),
        ], heading="Influencer"),
        MultiFieldPanel([
            FieldPanel('short_bio'),
            FieldPanel('hero_text'),
            FieldPanel('hero_description'),
            FieldPanel('link'),
        ], heading="Copy"),
        MultiFieldPanel([
            FieldPanel('bullet_point_1'),
            FieldPanel('bullet_point_2'),
            FieldPanel('bullet_point_3'),
            FieldPanel('bullet_point_4'),
        ], heading="Bullet points"),
        FieldPanel('metadata'),
        FieldPanel('published_at'),
    ]

    search_fields = [
        index.SearchField('name', boost=10),
        index.SearchField('slug'),
        index.SearchField('short_bio'),
    ]

    def __str__(self):
        return f"{self.name} ({self.locale_code})"

    @property
    def document_id(self) -> str:
        """Identifier shared by every locale variant of this influencer."""
        return str(self.translation_key)

    @property
    def locale_code(self) -> str:
        return self.locale.language_code if self.locale_id else ''

    @property
    def bullet_points(self):
        return [getattr(self, f'bullet_point_{i}') for i in range(1, BULLET_POINT_COUNT + 1)]

    @property
    def is_published(self) -> bool:
        return self.published_at is not None

    class Meta(TranslatableMixin.Meta):
        unique_together = [
            ('translation_key', 'locale'),
            ('slug', 'locale'),
        ]
        ordering = ['id']
        verbose_name = "Influencer"
        verbose_name_plural = "Influencers"
