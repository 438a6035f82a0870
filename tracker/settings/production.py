# tracker/settings/production.py

from django.core.exceptions import ImproperlyConfigured

from .base import *

DEBUG = False

if SECRET_KEY.startswith('django-insecure'):
    raise ImproperlyConfigured('SECRET_KEY must be set in production')

if len(SIMPLE_JWT['SIGNING_KEY']) < 32:
    raise ImproperlyConfigured('JWT_SECRET must be at least 32 characters')

# === SECURITY ===

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_HSTS_SECONDS = env.int('SECURE_HSTS_SECONDS', default=0)

DATABASES['default']['CONN_MAX_AGE'] = env.int('CONN_MAX_AGE', default=60)
