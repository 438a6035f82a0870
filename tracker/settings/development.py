# tracker/settings/development.py

from .base import *

# === DEVELOPMENT ===

DEBUG = True

ALLOWED_HOSTS = ['localhost', '127.0.0.1', '0.0.0.0']

CORS_ALLOW_ALL_ORIGINS = True

# === VERBOSE LOGGING ===

LOGGING['root']['level'] = 'DEBUG'

LOGGING['loggers']['django.db.backends'] = {
    'handlers': ['console'],
    'level': env('SQL_LOG_LEVEL', default='INFO'),
    'propagate': False,
}
