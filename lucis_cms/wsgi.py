"""
WSGI config for Lucis CMS.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'lucis_cms.settings.dev')

application = get_wsgi_application()
