"""
WSGI config for humsite project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'humsite.settings')

application = get_wsgi_application()
