"""
WSGI config for pizzastore.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "pizzastore.settings")

application = get_wsgi_application()
