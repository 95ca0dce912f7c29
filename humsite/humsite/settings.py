"""
Django settings for humsite project.

Mọi giá trị đều đọc từ biến môi trường (file .env nằm cạnh manage.py).
"""
import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / '.env')


def _get_env(*keys, default=None):
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != '':
            return v.strip()
    return default


def _get_int(*keys, default=None):
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return int(v)


def _get_bool(*keys, default=False):
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return v.lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = _get_env('SECRET_KEY', 'DJANGO_SECRET_KEY', default='dev-insecure-hum-pizza-key')
DEBUG = _get_bool('DEBUG', default=True)
ALLOWED_HOSTS = (_get_env('ALLOWED_HOSTS', default='*') or '*').split(',')

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'rest_framework_simplejwt',
    'HUMPIZZA',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'humsite.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'humsite.wsgi.application'

# ==========================================
# DATABASE (sqlite mặc định, MariaDB/MySQL qua PyMySQL)
# ==========================================
if _get_env('DB_ENGINE', default='sqlite') == 'mysql':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.mysql',
            'NAME': _get_env('DB_NAME', default='humpizza'),
            'USER': _get_env('DB_USER', default='root'),
            'PASSWORD': _get_env('DB_PASSWORD', default=''),
            'HOST': _get_env('DB_HOST', default='127.0.0.1'),
            'PORT': _get_env('DB_PORT', default='3306'),
            'OPTIONS': {'charset': 'utf8mb4'},
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': _get_env('DB_NAME', default=str(BASE_DIR / 'db.sqlite3')),
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'vi'
LANGUAGES = [('vi', 'Tiếng Việt'), ('en', 'English')]
TIME_ZONE = 'Asia/Ho_Chi_Minh'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
MEDIA_URL = '/media/'
MEDIA_ROOT = _get_env('MEDIA_ROOT', default=str(BASE_DIR / 'media'))

# Thư mục lưu file upload (ảnh, video hero) - phục vụ qua /api/assets/<tên file>
ASSETS_DIR = _get_env('ASSETS_DIR', default=str(BASE_DIR / 'attached_assets'))
MAX_IMAGE_UPLOAD_MB = _get_int('MAX_IMAGE_UPLOAD_MB', default=10)
MAX_VIDEO_UPLOAD_MB = _get_int('MAX_VIDEO_UPLOAD_MB', default=200)
UPLOAD_URL_TTL = _get_int('UPLOAD_URL_TTL', default=900)

# Video lớn: không giữ trong RAM
FILE_UPLOAD_MAX_MEMORY_SIZE = 5 * 1024 * 1024
DATA_UPLOAD_MAX_MEMORY_SIZE = MAX_VIDEO_UPLOAD_MB * 1024 * 1024

SESSION_COOKIE_AGE = _get_int('SESSION_TIMEOUT_MINUTES', default=60 * 24) * 60

# ==========================================
# REST FRAMEWORK
# ==========================================
REST_FRAMEWORK = {
    # JWT đứng trước để request chưa đăng nhập nhận 401 (không phải 403)
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'rest_framework_simplejwt.authentication.JWTAuthentication',
        'HUMPIZZA.authentication.CsrfExemptSessionAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'EXCEPTION_HANDLER': 'HUMPIZZA.exceptions.api_exception_handler',
}

SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=_get_int('JWT_ACCESS_MINUTES', default=60)),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=1),
}

# ==========================================
# LOGGING
# ==========================================
LOG_LEVEL = (_get_env('LOG_LEVEL', default='INFO') or 'INFO').upper()

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
        'level': 'WARNING',
    },
    'loggers': {
        'HUMPIZZA': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'humclient': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}
