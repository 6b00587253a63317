from pathlib import Path

from decouple import Csv, config

# -------------------------------
# Diretórios base
# -------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# -------------------------------
# Segurança e debug
# -------------------------------
SECRET_KEY = config('SECRET_KEY')
DEBUG = config('DEBUG', default=False, cast=bool)
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='', cast=Csv())

# -------------------------------
# Cookies & CSRF
# -------------------------------
SESSION_COOKIE_SECURE   = config('SESSION_COOKIE_SECURE', default=False, cast=bool) # Desenvolvido para HTTPS
SESSION_COOKIE_HTTPONLY = config('SESSION_COOKIE_HTTPONLY', default=True, cast=bool)
SESSION_COOKIE_SAMESITE = config('SESSION_COOKIE_SAMESITE', default='Lax')
CSRF_COOKIE_SECURE      = config('CSRF_COOKIE_SECURE', default=False, cast=bool) # Desenvolvido para HTTPS
CSRF_COOKIE_HTTPONLY    = config('CSRF_COOKIE_HTTPONLY', default=True, cast=bool)
CSRF_COOKIE_SAMESITE    = config('CSRF_COOKIE_SAMESITE', default='Lax')

AUTH_COOKIE_NAME     = config('AUTH_COOKIE_NAME', default='authToken')
AUTH_COOKIE_SECURE   = config('AUTH_COOKIE_SECURE', default=False, cast=bool) # Desenvolvido para HTTPS
AUTH_COOKIE_HTTPONLY = config('AUTH_COOKIE_HTTPONLY', default=True, cast=bool)
AUTH_COOKIE_SAMESITE = config('AUTH_COOKIE_SAMESITE', default='Lax')

SECURE_SSL_REDIRECT          = config('SECURE_SSL_REDIRECT', default=False, cast=bool)
SECURE_HSTS_SECONDS          = config('SECURE_HSTS_SECONDS', default=31536000, cast=int)
SECURE_HSTS_INCLUDE_SUBDOMAINS = config('SECURE_HSTS_INCLUDE_SUBDOMAINS', default=True, cast=bool)
SECURE_HSTS_PRELOAD          = config('SECURE_HSTS_PRELOAD', default=True, cast=bool)
SECURE_PROXY_SSL_HEADER      = ('HTTP_X_FORWARDED_PROTO', 'https')

# -------------------------------
# CORS
# -------------------------------
CORS_ALLOW_ALL_ORIGINS = config('CORS_ALLOW_ALL_ORIGINS', default=False, cast=bool)
CORS_ALLOW_CREDENTIALS = config('CORS_ALLOW_CREDENTIALS', default=True, cast=bool)
CSRF_TRUSTED_ORIGINS  = config('CSRF_TRUSTED_ORIGINS', default='http://localhost:5173', cast=Csv())
CORS_ALLOWED_ORIGINS   = config('CORS_ALLOWED_ORIGINS',   default='http://localhost:5173', cast=Csv())
CORS_ALLOW_METHODS     = config('CORS_ALLOW_METHODS',     default='GET,POST,PUT,PATCH,DELETE,OPTIONS', cast=Csv())
CORS_ALLOW_HEADERS     = config('CORS_ALLOW_HEADERS',     default='Authorization,Content-Type,X-CSRFToken', cast=Csv())

# -------------------------------
# Redis (cache)
# -------------------------------
REDIS_URL = config('REDIS_URL', default='redis://localhost:6379/0')
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": REDIS_URL,
        "KEY_PREFIX": "corujo",
    }
}

# -------------------------------
# Distribuição de clientes
# -------------------------------
# "pool_consumption" → consome o pool local (clientes_distribuidos)
# "delegated_quota"  → repassa a distribuição para o webhook externo
ALLOCATION_POLICY         = config('ALLOCATION_POLICY', default='pool_consumption')
MAX_DISTRIBUTION_QUANTITY = config('MAX_DISTRIBUTION_QUANTITY', default=500, cast=int)
DAILY_CALL_GOAL           = config('DAILY_CALL_GOAL', default=50, cast=int)
INSTALLMENT_FEES_CACHE_TTL = config('INSTALLMENT_FEES_CACHE_TTL', default=300, cast=int)

# -------------------------------
# Webhooks de automação
# -------------------------------
TICKET_WEBHOOK_URL       = config('TICKET_WEBHOOK_URL', default='')
DISTRIBUTION_WEBHOOK_URL = config('DISTRIBUTION_WEBHOOK_URL', default='')
NOTIFIER_TIMEOUT         = config('NOTIFIER_TIMEOUT', default=10, cast=int)

# -------------------------------
# JWT
# -------------------------------
JWT_SECRET     = config('JWT_SECRET')
JWT_ALGORITHM  = config('JWT_ALGORITHM', default='HS256')
JWT_EXPIRES_IN = config('JWT_EXPIRES_IN', default=43200, cast=int)

# -------------------------------
# Apps, Middleware, URLs
# -------------------------------
INSTALLED_APPS = [
    'corsheaders',
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'drf_yasg',
    'django_prometheus',
    'corujo_ticket_api.apps.CorujoTicketConfig',
    'plugins.django_interface.apps.DjangoInterfaceConfig',
]

MIDDLEWARE = [
    'django_prometheus.middleware.PrometheusBeforeMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'plugins.django_interface.request_middleware.RequestContextMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django_prometheus.middleware.PrometheusAfterMiddleware',
]

ROOT_URLCONF = 'corujo_ticket_api.urls'
WSGI_APPLICATION = 'corujo_ticket_api.wsgi.application'
ASGI_APPLICATION = 'corujo_ticket_api.asgi.application'

# -------------------------------
# Templates
# -------------------------------
TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [BASE_DIR / 'templates'],
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

# -------------------------------
# REST Framework
# -------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (
        "corujo_core.adapters.security.jwt_authentication.JWTAuthentication",
        "corujo_core.adapters.security.jwt_authentication.CookieJWTAuthentication",
    ),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
}
SWAGGER_SETTINGS = {
    'SECURITY_DEFINITIONS': {
        'Bearer': {
            'type': 'apiKey', 'name': 'Authorization', 'in': 'header'
        }
    },
}

# -------------------------------
# Banco de Dados
# -------------------------------
DATABASES = {
    'default': {
        'ENGINE':   'django.db.backends.postgresql',
        'NAME':     config('DB_NAME', default='corujo_ticket'),
        'USER':     config('DB_USER', default='postgres'),
        'PASSWORD': config('DB_PASS', default=''),
        'HOST':     config('DB_HOST', default='localhost'),
        'PORT':     config('DB_PORT', default='5432'),
    }
}

# -------------------------------
# Internacionalização
# -------------------------------
LANGUAGE_CODE = 'pt-br'
TIME_ZONE     = 'America/Sao_Paulo'
USE_I18N      = True
USE_TZ        = True

# -------------------------------
# Arquivos estáticos
# -------------------------------
STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage"},
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
