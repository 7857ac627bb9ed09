"""
WSGI config for the String Analyzer service.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'analyzer_service.settings')

application = get_wsgi_application()
