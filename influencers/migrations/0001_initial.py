# Generated manually for the influencer collection

import uuid

import django.db.models.deletion
import wagtail.search.index
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('wagtailcore', '0054_initial_locale'),
    ]

    operations = [
        migrations.CreateModel(
            name='Influencer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('translation_key', models.UUIDField(default=uuid.uuid4, editable=False)),
                ('slug', models.CharField(db_index=True, help_text='Client-side URL segment, identical across locales', max_length=255)),
                ('name', models.CharField(max_length=255)),
                ('code', models.CharField(blank=True, max_length=100)),
                ('percentage', models.DecimalField(decimal_places=2, default=0, help_text='Discount percentage offered with the code', max_digits=10)),
                ('short_bio', models.TextField(blank=True)),
                ('hero_text', models.CharField(blank=True, max_length=255)),
                ('hero_description', models.TextField(blank=True)),
                ('link', models.CharField(blank=True, help_text='Call-to-action link for the influencer section', max_length=500)),
                ('bullet_point_1', models.CharField(blank=True, max_length=255)),
                ('bullet_point_2', models.CharField(blank=True, max_length=255)),
                ('bullet_point_3', models.CharField(blank=True, max_length=255)),
                ('bullet_point_4', models.CharField(blank=True, max_length=255)),
                ('metadata', models.JSONField(blank=True, help_text="SEO metadata: {'meta_title': ..., 'meta_description': ...}", null=True)),
                ('published_at', models.DateTimeField(blank=True, help_text='Empty while the entry is a draft', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('locale', models.ForeignKey(editable=False, on_delete=django.db.models.deletion.PROTECT, related_name='+', to='wagtailcore.locale', verbose_name='locale')),
            ],
            options={
                'verbose_name': 'Influencer',
                'verbose_name_plural': 'Influencers',
                'ordering': ['id'],
                'abstract': False,
                'unique_together': {('translation_key', 'locale'), ('slug', 'locale')},
            },
            bases=(wagtail.search.index.Indexed, models.Model),
        ),
    ]
