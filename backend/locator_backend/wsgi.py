"""
WSGI config for the locator backend.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "locator_backend.settings")

application = get_wsgi_application()
