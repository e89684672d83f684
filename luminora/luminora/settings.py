import os
from pathlib import Path
from luminora.utils import custom_settings


django_settings = custom_settings()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

DATA_DIR = Path(django_settings.get('data_dir') or BASE_DIR / 'db')


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = django_settings.get('secret_key') or 'django-insecure'

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = django_settings.get('debug', True)

ALLOWED_HOSTS = django_settings.get('allowed_hosts') or ['localhost', '127.0.0.1', 'testserver']

# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'api',
    'giveaway',
    'referral',
    'drf_yasg',
    'django_filters',
]


throttle = django_settings.get('throttle') or {}

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'api.permissions.IsNotBlocked',
        'api.permissions.IsNotBot',
    ],
    'DEFAULT_FILTER_BACKENDS': [
        'django_filters.rest_framework.DjangoFilterBackend',
        'rest_framework.filters.OrderingFilter',
    ],
    'DEFAULT_RENDERER_CLASSES': (
        'rest_framework.renderers.JSONRenderer',
        'api.renderer.NoHTMLFormBrowsableAPIRenderer'
    ),
    'DEFAULT_THROTTLE_CLASSES': [
        'api.throttling.GeneralRateThrottle',
    ],
    'DEFAULT_THROTTLE_RATES': {
        'general': throttle.get('general', '30/min'),
        'strict': throttle.get('strict', '10/min'),
    },
    'EXCEPTION_HANDLER': 'api.exceptions.exception_handler',
}


MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'luminora.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'luminora.wsgi.application'
ASGI_APPLICATION = 'luminora.asgi.application'


# Database

if 'database' in django_settings:
    database = django_settings['database']
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': database['name'],
            'USER': database['user'],
            'PASSWORD': database['password'],
            'HOST': database['host'],
            'PORT': database.get('port', 5432),
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': DATA_DIR / 'luminora.sqlite3',
        }
    }


# Internationalization

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


# Static files and uploads

STATIC_URL = '/static/'

STATIC_ROOT = BASE_DIR / 'static'

MEDIA_URL = '/uploads/'

MEDIA_ROOT = Path(django_settings.get('media_root') or BASE_DIR / 'uploads')

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Giveaway platform

ADMIN_TOKEN = os.environ.get('LUMINORA_ADMIN_TOKEN') or django_settings.get('admin_token') or ''

# Public base used for referral links, e.g. the SPA origin. Falls back to this host.
REFERRAL_BASE_URL = django_settings.get('referral_base_url') or ''

# Honour X-Forwarded-For when running behind a reverse proxy.
TRUST_PROXY = django_settings.get('trust_proxy', True)

AVATAR_POOL = django_settings.get('avatars') or [
    f'https://api.dicebear.com/7.x/anime/svg?seed=anime{i}' for i in range(1, 11)
]

AVATAR_MAX_SIZE = django_settings.get('avatar_max_size', 5 * 1024 * 1024)

AVATAR_EXTENSIONS = ['.jpg', '.jpeg', '.png', '.gif', '.webp']

# Channel links may open an app directly, e.g. tg://resolve?domain=...
CHANNEL_URL_SCHEMES = django_settings.get('channel_url_schemes') or ['http', 'https', 'tg']

DATA_UPLOAD_MAX_MEMORY_SIZE = 10 * 1024 * 1024


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
}
