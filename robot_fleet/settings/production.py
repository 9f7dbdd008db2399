"""
Production settings
"""
from .base import *

DEBUG = False
ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', '').split(',')

if SECRET_KEY.startswith('django-insecure'):
    raise RuntimeError('SECRET_KEY must be set in production')

# Security
SECURE_BROWSER_XSS_FILTER = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'
SECURE_HSTS_SECONDS = 31536000
SECURE_HSTS_INCLUDE_SUBDOMAINS = True
SECURE_HSTS_PRELOAD = True

# HTTPS
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# CORS is restricted to the configured frontends
CORS_ALLOW_ALL_ORIGINS = False
CORS_ALLOWED_ORIGINS = [o for o in os.getenv('CORS_ALLOWED_ORIGINS', '').split(',') if o]

LOGGING['handlers']['file']['filename'] = os.getenv('LOG_FILE', '/var/log/robot_fleet/django.log')
LOGGING['loggers']['django']['handlers'] = ['console', 'file']
LOGGING['loggers']['api']['handlers'] = ['console', 'file']
LOGGING['loggers']['django']['level'] = 'WARNING'
LOGGING['loggers']['api']['level'] = 'INFO'

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.redis.RedisCache',
        'LOCATION': os.getenv('REDIS_URL', 'redis://127.0.0.1:6379/1'),
    }
}

STATIC_ROOT = os.getenv('STATIC_ROOT', '/var/www/robot_fleet/static/')
