"""
Test settings
"""
from .base import *

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Hashing speed matters more than strength here
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

SIMPLE_JWT['SIGNING_KEY'] = 'robot-fleet-test-signing-key-with-enough-length'

LOGGING['loggers']['api']['level'] = 'WARNING'

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}
