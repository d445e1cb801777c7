"""Django settings for config project."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Cargar variables desde ambos lugares para compatibilidad:
# 1) Raíz del repo (padre de 'config')
# 2) Carpeta 'config'
_ROOT_DIR = Path(__file__).resolve().parents[2]
_CONFIG_DIR = Path(__file__).resolve().parents[1]

# Cargar primero raíz y luego config con override=False (no pisa valores ya cargados)
load_dotenv(_ROOT_DIR / ".env", override=False)
load_dotenv(_CONFIG_DIR / ".env", override=False)

from .crm_config import *  # noqa: E402,F401,F403

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
# PROJECT_DIR es la carpeta raíz del repo (padre de 'config')
PROJECT_DIR = os.path.dirname(BASE_DIR)

SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'dev-only-7q$1n!vx3k@atlant-metal-local')

DEBUG = os.environ.get('DJANGO_DEBUG', 'True') in {"1", "true", "True", "yes", "on"}

ALLOWED_HOSTS = [h for h in os.environ.get('ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',') if h]

# Application definition
INSTALLED_APPS = [
    'django.contrib.messages',
    'django.contrib.staticfiles',

    #third-party apps
    'crispy_forms',
    'crispy_bootstrap4',

    'catalog.apps.CatalogConfig',
    'cart.apps.CartConfig',
    'leads.apps.LeadsConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [
            os.path.join(PROJECT_DIR, 'templates'),  # plantillas a nivel de proyecto
        ],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.messages.context_processors.messages',
                'cart.context_processors.cart',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'


# Database
# No hay base de datos: el catálogo es un JSON y la cesta vive en la cookie de sesión.
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.dummy',  # evita que Django intente abrir SQLite
    }
}

# La sesión (y con ella la cesta) se guarda firmada en el navegador, sin tablas SQL
SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_AGE = 60 * 60 * 24 * 30
MESSAGE_STORAGE = 'django.contrib.messages.storage.cookie.CookieStorage'


# Internationalization
LANGUAGE_CODE = 'ru'

TIME_ZONE = 'Asia/Almaty'

USE_I18N = True

USE_TZ = True

# Static files (CSS, JavaScript, Images)
STATIC_ROOT = os.path.join(PROJECT_DIR, 'staticfiles')
STATIC_URL = '/static/'

STATICFILES_DIRS = (
    os.path.join(PROJECT_DIR, 'static'),
)


#Crispy templates for form rendering
CRISPY_ALLOWED_TEMPLATE_PACKS = 'bootstrap4'
CRISPY_TEMPLATE_PACK = 'bootstrap4'

# Cart
CART_SESSION_ID = 'atlantmetal_cart'
CART_TONS_STEP = '0.1'
CART_MIN_TONS = '0.1'
# the whole cart travels in the signed session cookie (4096 bytes per cookie)
CART_MAX_LINES = 20

# Catalog / calculator data (None = ficheros dentro de catalog/data)
CATALOG_DATA_FILE = os.environ.get('CATALOG_DATA_FILE') or None
PRICING_DATA_FILE = os.environ.get('PRICING_DATA_FILE') or None
RUB_RATE = os.environ.get('RUB_RATE') or None

# Order form
ORDER_SUBMISSION_SESSION_ID = 'order_submission'
ORDER_SUCCESS_CLOSE_DELAY = 3  # segundos
ORDER_SUBMIT_TOKEN_TTL = 60 * 60

# one-time order submit tokens are claimed here
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'atlantmetal',
    }
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '[{levelname}] {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'catalog': {'handlers': ['console'], 'level': os.environ.get('LOG_LEVEL', 'INFO'), 'propagate': False},
        'cart': {'handlers': ['console'], 'level': os.environ.get('LOG_LEVEL', 'INFO'), 'propagate': False},
        'leads': {'handlers': ['console'], 'level': os.environ.get('LOG_LEVEL', 'INFO'), 'propagate': False},
    },
}
