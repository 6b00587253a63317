import time
from functools import wraps

import structlog
from prometheus_client import Counter, Histogram

logger = structlog.get_logger(__name__)

HTTP_LATENCY = Histogram("corujo_http_view_seconds", "Latência das views", ["view"])
HTTP_ERRORS  = Counter("corujo_http_view_errors_total", "Respostas 4xx/5xx por view", ["view", "status"])


def track_http(view_name):
    """Mede latência e conta respostas de erro da view decorada."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(self, request, *args, **kwargs):
            start = time.perf_counter()
            try:
                resp = fn(self, request, *args, **kwargs)
            finally:
                HTTP_LATENCY.labels(view_name).observe(time.perf_counter() - start)
            status_code = getattr(resp, "status_code", 200)
            if status_code >= 400:  # noqa: PLR2004
                HTTP_ERRORS.labels(view_name, str(status_code)).inc()
                logger.info("http.error_response", view=view_name, status=status_code)
            return resp
        return wrapper
    return decorator
