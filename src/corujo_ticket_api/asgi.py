import os

from config.structlog_config import configure_logging

configure_logging(level=os.getenv("LOG_LEVEL", "INFO"))
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()
