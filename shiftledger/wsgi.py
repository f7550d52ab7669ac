"""
WSGI config for shiftledger project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "shiftledger.settings")

application = get_wsgi_application()
