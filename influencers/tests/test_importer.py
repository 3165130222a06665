"""
Tests for the influencer import procedure.

Mapping helpers and the importer are exercised against an in-memory store;
ORM-backed behaviour (shared translation keys, rollback) is covered at the end.
"""
import json
import tempfile
from decimal import Decimal
from io import StringIO
from pathlib import Path

import yaml
from django.test import SimpleTestCase, TestCase
from wagtail.models import Locale

from influencers.exceptions import FatalStartupError, RecordValidationError
from influencers.importer import (
    ImportConfig,
    ImportStats,
    InfluencerImporter,
    build_locale_data,
    build_metadata,
    flatten_bullet_items,
    load_source_file,
    parse_percentage,
    validate_record,
)
from influencers.models import Influencer
from influencers.reporting import Reporter
from influencers.storage import InfluencerStore
from influencers.tests.fakes import FakeInfluencerStore


def make_record(slug='unchained', name='Unchained', with_fr=True, **overrides):
    record = {
        'slug': slug,
        'name': name,
        'discount': {'code': 'UNCHAINED15', 'percentage': 15},
        'metadata': {'title': 'Unchained x Lucis', 'description': 'Save 15% with Unchained'},
        'translations': {
            'en': {
                'shortBio': 'Podcast host and health coach.',
                'heroText': 'Feel unchained',
                'heroDescription': 'Daily light therapy for busy people.',
                'influencerSection': {
                    'ctaLink': 'https://lucis.life/shop',
                    'bulletItems': ['Better sleep', 'More energy', 'Sharper focus', 'Calmer mood'],
                },
            },
        },
    }
    if with_fr:
        record['translations']['fr'] = {
            'shortBio': 'Animateur de podcast et coach santé.',
            'heroText': 'Libérez-vous',
            'heroDescription': 'Luminothérapie quotidienne.',
            'influencerSection': {
                'ctaLink': 'https://lucis.life/fr/shop',
                'bulletItems': ['Meilleur sommeil', "Plus d'énergie", 'Concentration', 'Humeur calme'],
            },
        }
    record.update(overrides)
    return record


# =============================================================================
# IMPORT STATS TESTS
# =============================================================================

class ImportStatsTest(SimpleTestCase):
    """Tests for ImportStats tracking class."""

    def test_counters(self):
        stats = ImportStats(total=3)
        stats.record_imported()
        stats.record_skipped()
        stats.record_failure('3/3 Broken: nope')
        self.assertEqual(stats.as_dict(), {
            'total': 3,
            'imported': 1,
            'skipped': 1,
            'failed': 1,
            'errors': ['3/3 Broken: nope'],
        })
        self.assertTrue(stats.has_failures)

    def test_no_failures(self):
        stats = ImportStats(total=1)
        stats.record_imported()
        self.assertFalse(stats.has_failures)

    def test_summary_counts(self):
        stats = ImportStats(total=2)
        stats.record_imported()
        stats.record_skipped()
        summary = stats.summary()
        self.assertIn('Import Summary', summary)
        self.assertIn('Total processed:          2', summary)
        self.assertNotIn('Errors:', summary)

    def test_summary_errors_truncated(self):
        stats = ImportStats(total=15)
        for i in range(15):
            stats.record_failure(f'Error {i}')
        summary = stats.summary()
        self.assertIn('Errors: 15', summary)
        self.assertIn('Error 9', summary)
        self.assertNotIn('Error 10', summary)
        self.assertIn('... and 5 more', summary)


# =============================================================================
# SOURCE LOADING
# =============================================================================

class LoadSourceFileTest(SimpleTestCase):

    def write_temp(self, content, suffix='.json'):
        f = tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False, encoding='utf-8')
        f.write(content)
        f.close()
        return Path(f.name)

    def test_json(self):
        path = self.write_temp(json.dumps({'influencers': [make_record()]}))
        records = load_source_file(path)
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0]['slug'], 'unchained')

    def test_yaml(self):
        path = self.write_temp(yaml.dump({'influencers': [make_record()]}), suffix='.yaml')
        records = load_source_file(path)
        self.assertEqual(records[0]['name'], 'Unchained')

    def test_missing_file(self):
        with self.assertRaises(FatalStartupError) as ctx:
            load_source_file(Path('/nonexistent/influencers.json'))
        self.assertIn('File not found', str(ctx.exception))

    def test_malformed_json(self):
        path = self.write_temp('{"influencers": [')
        with self.assertRaises(FatalStartupError):
            load_source_file(path)

    def test_missing_key(self):
        path = self.write_temp(json.dumps({'people': []}))
        with self.assertRaises(FatalStartupError):
            load_source_file(path)

    def test_empty_list(self):
        path = self.write_temp(json.dumps({'influencers': []}))
        with self.assertRaises(FatalStartupError):
            load_source_file(path)

    def test_not_a_list(self):
        path = self.write_temp(json.dumps({'influencers': {'slug': 'x'}}))
        with self.assertRaises(FatalStartupError):
            load_source_file(path)

    def test_directory_is_fatal(self):
        with tempfile.TemporaryDirectory() as directory:
            with self.assertRaises(FatalStartupError) as ctx:
                load_source_file(Path(directory))
        self.assertIn('Error loading', str(ctx.exception))


# =============================================================================
# RECORD MAPPING
# =============================================================================

class FlattenBulletItemsTest(SimpleTestCase):

    def test_pads_missing_items(self):
        self.assertEqual(flatten_bullet_items(['a', 'b']), {
            'bullet_point_1': 'a',
            'bullet_point_2': 'b',
            'bullet_point_3': '',
            'bullet_point_4': '',
        })

    def test_none(self):
        self.assertEqual(set(flatten_bullet_items(None).values()), {''})

    def test_extra_items_ignored(self):
        fields = flatten_bullet_items(['1', '2', '3', '4', '5'])
        self.assertEqual(len(fields), 4)
        self.assertEqual(fields['bullet_point_4'], '4')


class ParsePercentageTest(SimpleTestCase):

    def test_int(self):
        self.assertEqual(parse_percentage(15), Decimal('15'))

    def test_float_goes_through_its_string_form(self):
        self.assertEqual(parse_percentage(12.5), Decimal('12.5'))

    def test_rounds_to_cents(self):
        self.assertEqual(parse_percentage(12.345), Decimal('12.35'))
        self.assertEqual(parse_percentage('33.333'), Decimal('33.33'))

    def test_large_value(self):
        self.assertEqual(parse_percentage(1500), Decimal('1500.00'))

    def test_not_a_number_rejected(self):
        with self.assertRaises(RecordValidationError):
            parse_percentage('NaN')

    def test_missing_is_zero(self):
        self.assertEqual(parse_percentage(None), Decimal('0'))

    def test_invalid(self):
        with self.assertRaises(RecordValidationError):
            parse_percentage('fifteen')

    def test_bool_rejected(self):
        with self.assertRaises(RecordValidationError):
            parse_percentage(True)


class BuildMetadataTest(SimpleTestCase):

    def test_no_metadata_block(self):
        record = make_record()
        del record['metadata']
        self.assertIsNone(build_metadata(record, record['translations']['en']))

    def test_title_defaults_to_name(self):
        record = make_record(metadata={'description': 'Desc'})
        metadata = build_metadata(record, record['translations']['en'])
        self.assertEqual(metadata['meta_title'], 'Unchained')
        self.assertEqual(metadata['meta_description'], 'Desc')

    def test_description_defaults_to_locale_short_bio(self):
        record = make_record(metadata={})
        metadata = build_metadata(record, record['translations']['fr'])
        self.assertEqual(metadata['meta_description'], 'Animateur de podcast et coach santé.')


class BuildLocaleDataTest(SimpleTestCase):

    def test_full_record(self):
        record = make_record()
        data = build_locale_data(record, record['translations']['en'])
        self.assertEqual(data['slug'], 'unchained')
        self.assertEqual(data['code'], 'UNCHAINED15')
        self.assertEqual(data['percentage'], Decimal('15'))
        self.assertEqual(data['hero_text'], 'Feel unchained')
        self.assertEqual(data['link'], 'https://lucis.life/shop')
        self.assertEqual(data['bullet_point_3'], 'Sharper focus')
        self.assertIsNone(data['published_at'])

    def test_minimal_translation(self):
        record = {'slug': 'x', 'name': 'X', 'translations': {'en': {}}}
        data = build_locale_data(record, record['translations']['en'])
        self.assertEqual(data['code'], '')
        self.assertEqual(data['percentage'], Decimal('0'))
        self.assertEqual(data['short_bio'], '')
        self.assertEqual(data['link'], '')
        self.assertIsNone(data['metadata'])


class ValidateRecordTest(SimpleTestCase):

    def test_valid(self):
        validate_record(make_record(), 'en')

    def test_missing_slug(self):
        with self.assertRaisesMessage(RecordValidationError, 'slug or name'):
            validate_record(make_record(slug=''), 'en')

    def test_missing_primary_translation(self):
        record = make_record()
        del record['translations']['en']
        with self.assertRaisesMessage(RecordValidationError, 'Missing en translation'):
            validate_record(record, 'en')

    def test_not_a_dict(self):
        with self.assertRaises(RecordValidationError):
            validate_record(['slug'], 'en')


# =============================================================================
# IMPORTER WITH IN-MEMORY STORE
# =============================================================================

class InfluencerImporterTest(SimpleTestCase):

    def setUp(self):
        self.store = FakeInfluencerStore()
        self.out = StringIO()

    def make_importer(self, **config):
        config = ImportConfig(**config)
        return InfluencerImporter(self.store, config, Reporter(self.out, dry_run=config.dry_run))

    def test_creates_linked_locales(self):
        stats = self.make_importer().run([make_record()])

        self.assertEqual((stats.imported, stats.skipped, stats.failed), (1, 0, 0))
        en = self.store.find_one(slug='unchained', locale='en')
        fr = self.store.find_one(slug='unchained', locale='fr')
        self.assertEqual(en.document_id, fr.document_id)
        self.assertEqual(fr.short_bio, 'Animateur de podcast et coach santé.')
        self.assertEqual(fr.bullet_point_1, 'Meilleur sommeil')

    def test_shared_fields_copied_verbatim(self):
        self.make_importer().run([make_record()])
        en = self.store.find_one(locale='en')
        fr = self.store.find_one(locale='fr')
        for field in ('slug', 'name', 'code', 'percentage'):
            self.assertEqual(getattr(en, field), getattr(fr, field))

    def test_end_to_end_primary_only(self):
        record = {
            'slug': 'x',
            'name': 'X',
            'translations': {'en': {'shortBio': 'b', 'influencerSection': {'bulletItems': ['p1', 'p2', 'p3', 'p4']}}},
        }
        stats = self.make_importer().run([record])

        self.assertEqual(stats.as_dict(), {'total': 1, 'imported': 1, 'skipped': 0, 'failed': 0, 'errors': []})
        self.assertEqual(self.store.count(), 1)
        entry = self.store.find_one(slug='x')
        self.assertEqual(entry.locale_code, 'en')
        self.assertEqual(entry.bullet_points, ['p1', 'p2', 'p3', 'p4'])
        self.assertEqual(self.store.count(locale='fr'), 0)

    def test_rerun_skips_everything(self):
        records = [make_record(), make_record(slug='glow', name='Glow')]
        self.make_importer().run(records)

        stats = self.make_importer().run(records)
        self.assertEqual(stats.imported, 0)
        self.assertEqual(stats.skipped, 2)
        self.assertEqual(self.store.count(), 4)

    def test_dry_run_never_writes(self):
        records = [make_record(), make_record(slug='', name='Nameless'), make_record(slug='glow')]
        stats = self.make_importer(dry_run=True).run(records)

        self.assertEqual(stats.imported, 2)
        self.assertEqual(stats.failed, 1)
        self.assertEqual(self.store.create_calls, [])
        self.assertIn('[DRY RUN] Would create entries', self.out.getvalue())

    def test_dry_run_counts_repeated_slug_as_skipped(self):
        records = [make_record(), make_record(name='Unchained Again')]
        stats = self.make_importer(dry_run=True).run(records)

        self.assertEqual((stats.imported, stats.skipped), (1, 1))
        self.assertIn('Already planned earlier in this batch', self.out.getvalue())

    def test_dry_run_matches_real_run_for_repeated_slug(self):
        records = [make_record(), make_record(name='Unchained Again')]
        dry = self.make_importer(dry_run=True).run(records)
        real = self.make_importer().run(records)
        self.assertEqual((dry.imported, dry.skipped), (real.imported, real.skipped))

    def test_missing_slug_fails_without_aborting(self):
        records = [make_record(slug=None, name='No Slug'), make_record(slug='glow', name='Glow')]
        stats = self.make_importer().run(records)

        self.assertEqual(stats.failed, 1)
        self.assertEqual(stats.imported, 1)
        self.assertEqual(stats.errors, ['1/2 No Slug: Missing required fields: slug or name'])
        self.assertIsNotNone(self.store.find_one(slug='glow'))

    def test_secondary_locale_not_configured(self):
        self.store.locales = ['en']
        stats = self.make_importer().run([make_record()])

        self.assertEqual(stats.imported, 1)
        self.assertEqual(self.store.count(locale='fr'), 0)
        self.assertIn('Secondary locale "fr" not found', self.out.getvalue())

    def test_missing_primary_locale_is_fatal(self):
        self.store.locales = ['fr']
        with self.assertRaises(FatalStartupError):
            self.make_importer().run([make_record()])
        self.assertEqual(self.store.create_calls, [])

    def test_empty_records_is_fatal(self):
        with self.assertRaises(FatalStartupError):
            self.make_importer().run([])

    def test_secondary_failure_is_counted_and_rolled_back(self):
        self.store.fail_create_for.add('fr')
        stats = self.make_importer().run([make_record()])

        self.assertEqual(stats.failed, 1)
        self.assertEqual(stats.imported, 0)
        self.assertIn('create refused for fr', stats.errors[0])
        self.assertEqual(self.store.count(), 0)

    def test_auto_publish_sets_published_at(self):
        self.make_importer(auto_publish=True).run([make_record()])
        self.assertIsNotNone(self.store.find_one(locale='en').published_at)
        self.assertIsNotNone(self.store.find_one(locale='fr').published_at)

    def test_draft_by_default(self):
        self.make_importer().run([make_record()])
        self.assertIsNone(self.store.find_one(locale='en').published_at)

    def test_records_processed_in_order(self):
        self.make_importer().run([make_record(slug='b', name='B'), make_record(slug='a', name='A')])
        created_slugs = [data['slug'] for locale, data in self.store.create_calls if locale == 'en']
        self.assertEqual(created_slugs, ['b', 'a'])

    def test_debug_prints_traceback(self):
        self.store.fail_create_for.add('en')
        self.make_importer(debug=True).run([make_record()])
        self.assertIn('Traceback', self.out.getvalue())


# =============================================================================
# IMPORTER WITH THE ORM STORE
# =============================================================================

class InfluencerImporterDatabaseTest(TestCase):

    @classmethod
    def setUpTestData(cls):
        Locale.objects.get_or_create(language_code='en')
        Locale.objects.get_or_create(language_code='fr')

    def test_translations_share_translation_key(self):
        stats = InfluencerImporter(InfluencerStore()).run([make_record()])

        self.assertEqual(stats.imported, 1)
        rows = Influencer.objects.filter(slug='unchained')
        self.assertEqual(rows.count(), 2)
        self.assertEqual(rows.values('translation_key').distinct().count(), 1)
        self.assertEqual(
            set(rows.values_list('locale__language_code', flat=True)),
            {'en', 'fr'},
        )

    def test_metadata_stored(self):
        InfluencerImporter(InfluencerStore()).run([make_record()])
        en = Influencer.objects.get(slug='unchained', locale__language_code='en')
        self.assertEqual(en.metadata, {
            'meta_title': 'Unchained x Lucis',
            'meta_description': 'Save 15% with Unchained',
        })
        self.assertEqual(en.percentage, Decimal('15'))

    def test_invalid_secondary_rolls_back_primary(self):
        record = make_record()
        record['translations']['fr']['heroText'] = 'x' * 300

        stats = InfluencerImporter(InfluencerStore()).run([record])

        self.assertEqual(stats.failed, 1)
        self.assertIn('hero_text', stats.errors[0])
        self.assertFalse(Influencer.objects.filter(slug='unchained').exists())

    def test_second_run_skips(self):
        InfluencerImporter(InfluencerStore()).run([make_record()])
        stats = InfluencerImporter(InfluencerStore()).run([make_record()])
        self.assertEqual((stats.imported, stats.skipped), (0, 1))
        self.assertEqual(Influencer.objects.count(), 2)

    def test_slug_with_dots_and_slashes(self):
        stats = InfluencerImporter(InfluencerStore()).run([
            make_record(slug='dr.jane'),
            make_record(slug='team/lucis', name='Team Lucis'),
        ])

        self.assertEqual((stats.imported, stats.failed), (2, 0))
        self.assertEqual(Influencer.objects.filter(slug='dr.jane').count(), 2)
        self.assertEqual(Influencer.objects.filter(slug='team/lucis').count(), 2)

    def test_fractional_and_large_percentages_stored(self):
        precise = make_record(slug='precise')
        precise['discount']['percentage'] = 12.345
        large = make_record(slug='large', name='Large')
        large['discount']['percentage'] = 1500

        stats = InfluencerImporter(InfluencerStore()).run([precise, large])

        self.assertEqual((stats.imported, stats.failed), (2, 0))
        self.assertEqual(
            Influencer.objects.get(slug='precise', locale__language_code='en').percentage,
            Decimal('12.35'),
        )
        self.assertEqual(
            Influencer.objects.get(slug='large', locale__language_code='fr').percentage,
            Decimal('1500'),
        )
