"""
Base settings for the Lucis CMS project.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent.parent


def env_bool(name, default=False):
    """Read a boolean flag such as DRY_RUN=true from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = os.environ.get('SECRET_KEY', 'django-insecure-change-me')

INSTALLED_APPS = [
    # Wagtail apps
    'wagtail.contrib.redirects',
    'wagtail.embeds',
    'wagtail.sites',
    'wagtail.users',
    'wagtail.snippets',
    'wagtail.documents',
    'wagtail.images',
    'wagtail.search',
    'wagtail.locales',
    'wagtail.admin',
    'wagtail',

    'modelcluster',
    'taggit',

    # Django apps
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',

    # Third party
    'django_extensions',

    # Project apps
    'influencers',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.locale.LocaleMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'wagtail.contrib.redirects.middleware.RedirectMiddleware',
]

ROOT_URLCONF = 'lucis_cms.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'lucis_cms.wsgi.application'

AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]

# The default locale created by Wagtail's migrations follows LANGUAGE_CODE
LANGUAGE_CODE = 'en'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

LANGUAGES = WAGTAIL_CONTENT_LANGUAGES = [
    ('en', 'English'),
    ('fr', 'French'),
]

# Static files
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

# Media files
MEDIA_URL = '/media/'
MEDIA_ROOT = BASE_DIR / 'media'

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.FileSystemStorage',
    },
    'staticfiles': {
        'BACKEND': 'whitenoise.storage.CompressedManifestStaticFilesStorage',
    },
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

# Wagtail settings
WAGTAIL_SITE_NAME = 'Lucis'
WAGTAILADMIN_BASE_URL = os.environ.get('WAGTAILADMIN_BASE_URL', 'http://localhost:8000')
WAGTAIL_I18N_ENABLED = True

# Search backend
WAGTAILSEARCH_BACKENDS = {
    'default': {
        'BACKEND': 'wagtail.search.backends.database',
    }
}

# =============================================================================
# HEADLESS PREVIEW
# =============================================================================
# The admin hands editors a link into the client site. Routes are keyed by
# model label and formatted with the document's slug/url.

CLIENT_URL = os.environ.get('CLIENT_URL', 'http://localhost:3000')
PREVIEW_SECRET = os.environ.get('PREVIEW_SECRET', '')
PREVIEW_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        'PREVIEW_ALLOWED_ORIGINS', 'https://lucis.life,https://www.lucis.life'
    ).split(',')
    if origin.strip()
]
# Client paths per model label. Only influencers live in this CMS today; the
# landing page and article routes are the client's, kept for when those models land.
PREVIEW_ROUTES = {
    'influencers.influencer': '/influencers/{slug}',
    'pages.dynamicpage': '/lp/{url}',
    'blog.article': '/blog/{slug}',
}

# =============================================================================
# INFLUENCER MAINTENANCE COMMANDS
# =============================================================================
# Defaults for import_influencers / verify_influencers / cleanup_influencers.
# The short flag names (DRY_RUN, FORCE, DEBUG) match how the scripts are run
# from a shell, e.g. `DRY_RUN=true python manage.py import_influencers`.

INFLUENCERS_PRIMARY_LOCALE = os.environ.get('INFLUENCERS_PRIMARY_LOCALE', 'en')
INFLUENCERS_SECONDARY_LOCALE = os.environ.get('INFLUENCERS_SECONDARY_LOCALE', 'fr')
INFLUENCERS_DATA_FILE = Path(
    os.environ.get('INFLUENCERS_DATA_FILE', BASE_DIR / 'influencers-data.json')
)
INFLUENCERS_VERIFY_SAMPLE_SLUG = os.environ.get('INFLUENCERS_VERIFY_SAMPLE_SLUG', 'unchained')

INFLUENCERS_DRY_RUN = env_bool('DRY_RUN')
INFLUENCERS_FORCE = env_bool('FORCE')
INFLUENCERS_DEBUG = env_bool('DEBUG')
INFLUENCERS_AUTO_PUBLISH = env_bool('AUTO_PUBLISH')
