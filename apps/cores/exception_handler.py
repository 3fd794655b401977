import logging

from django.db import IntegrityError
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again."
INTEGRITY_ERROR_MESSAGE = "Unable to save the data (duplicate or invalid value)."


def _error_body(status_code, message, code, errors=None):
    body = {
        "status": status_code,
        "message": message,
        "code": code,
        "timestamp": timezone.now().isoformat(),
    }
    if errors:
        body["errors"] = errors
    return body


def custom_exception_handler(exc, context):
    """
    Turn every exception into {status, message, code, timestamp[, errors]}.

    Domain errors (APIException subclasses) keep their status code. Database
    integrity errors answer 400 without the SQL detail, and anything else is
    logged with its traceback and answered with a generic 500.
    """
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, IntegrityError):
            logger.warning("Integrity error (not exposed to client): %s", exc)
            return Response(
                _error_body(status.HTTP_400_BAD_REQUEST, INTEGRITY_ERROR_MESSAGE, "integrity_error"),
                status=status.HTTP_400_BAD_REQUEST,
            )

        view = context.get("view")
        logger.exception("Unhandled exception in %s", view.__class__.__name__ if view else "unknown view")
        return Response(
            _error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE, "internal_error"),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        errors = exc.detail if isinstance(exc.detail, dict) else {"non_field_errors": exc.detail}
        response.data = _error_body(response.status_code, "Validation failed", "validation_error", errors)
        return response

    detail = getattr(exc, "detail", str(exc))
    response.data = _error_body(
        response.status_code,
        str(detail),
        getattr(detail, "code", None) or getattr(exc, "default_code", "error"),
    )
    return response
