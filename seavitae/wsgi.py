"""
WSGI config for the SeaVitae project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'seavitae.settings')

application = get_wsgi_application()
