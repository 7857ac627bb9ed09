"""
ASGI config for the String Analyzer service.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'analyzer_service.settings')

application = get_asgi_application()
