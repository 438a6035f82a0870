# tracker/settings/test.py

from .base import *

DEBUG = False

SECRET_KEY = 'test-secret-key-not-for-production-use'

SIMPLE_JWT['SIGNING_KEY'] = 'test-jwt-signing-key-with-at-least-32-chars'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'tracker-test-cache',
    }
}

# Fast hashing for tests
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

RATE_LIMITS = {
    'default': '1000/1m',
    'auth': '1000/1m',
}

# Keep test output quiet
LOGGING['root']['level'] = 'CRITICAL'
