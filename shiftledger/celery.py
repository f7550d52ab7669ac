"""
Celery application for shiftledger
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "shiftledger.settings")

app = Celery("shiftledger")

# All CELERY_* keys in Django settings become Celery config
app.config_from_object("django.conf:settings", namespace="CELERY")

# Picks up tasks.py from every installed app
app.autodiscover_tasks()
