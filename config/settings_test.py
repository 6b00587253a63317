"""
Settings usados pela suíte de testes (pytest-django / manage.py test).

Preenche as variáveis obrigatórias antes de carregar `config.settings`
e troca Postgres/Redis por SQLite e cache em memória.
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("TICKET_WEBHOOK_URL", "http://automacao.test/webhook/trello-ctn")
os.environ.setdefault("DISTRIBUTION_WEBHOOK_URL", "http://automacao.test/macros/distribuicao")

from config.settings import *  # noqa: E402, F403

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "corujo-tests",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}
