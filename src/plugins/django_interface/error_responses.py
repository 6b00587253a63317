from functools import wraps

import structlog
from client_distribution.core.domain.exceptions import (
    AlreadyResolved,
    DistributionError,
    InsufficientPool,
    InvalidRequest,
    UnknownEntity,
    UpstreamUnavailable,
)
from pydantic import ValidationError
from rest_framework import status
from rest_framework.response import Response

logger = structlog.get_logger(__name__)

STATUS_BY_ERROR: tuple[tuple[type[DistributionError], int], ...] = (
    (InvalidRequest, status.HTTP_400_BAD_REQUEST),
    (InsufficientPool, status.HTTP_409_CONFLICT),
    (AlreadyResolved, status.HTTP_409_CONFLICT),
    (UnknownEntity, status.HTTP_404_NOT_FOUND),
    (UpstreamUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def error_response(exc: DistributionError) -> Response:
    code = next(
        (http for err_type, http in STATUS_BY_ERROR if isinstance(exc, err_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    return Response({"error": exc.message, "code": exc.code}, status=code)


def domain_errors(fn):
    """Traduz erros de domínio / validação pydantic em respostas HTTP."""
    @wraps(fn)
    def wrapper(self, request, *args, **kwargs):
        try:
            return fn(self, request, *args, **kwargs)
        except ValidationError as exc:
            return Response(
                {"error": "Dados inválidos.", "code": "validation_error",
                 "detail": exc.errors(include_url=False, include_context=False, include_input=False)},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except DistributionError as exc:
            return error_response(exc)
    return wrapper
