from .local import *  # noqa

import os

DEBUG = False

SECRET_KEY = os.environ['DJANGO_SECRET_KEY']

# Prefer explicit hostname via env for safety
SITE_HOSTNAME = os.environ.get('SITE_HOSTNAME')  # e.g. 'atlantmetal.kz'
if SITE_HOSTNAME and SITE_HOSTNAME not in ALLOWED_HOSTS:
    ALLOWED_HOSTS.append(SITE_HOSTNAME)

# CSRF trusted origin for HTTPS
if SITE_HOSTNAME:
    CSRF_TRUSTED_ORIGINS = [f'https://{SITE_HOSTNAME}']

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# WhiteNoise sirve los estáticos (comprimidos) sin servidor aparte
MIDDLEWARE.insert(1, 'whitenoise.middleware.WhiteNoiseMiddleware')
STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'whitenoise.storage.CompressedStaticFilesStorage'},
}
