"""
pizzastore.api

DRF exception handler: maps the PizzaStore error taxonomy onto HTTP responses.
Anything else falls through to DRF's default handler.
"""
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from pizzastore.exceptions import (
    ForbiddenError,
    NotFoundError,
    PizzaStoreError,
    StoreError,
    ValidationError,
)

STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (StoreError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def exception_handler(exc, context):
    if isinstance(exc, PizzaStoreError):
        for err_type, http_status in STATUS_BY_ERROR:
            if isinstance(exc, err_type):
                return Response({"ok": False, "error": exc.message}, status=http_status)
        return Response({"ok": False, "error": exc.message}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return drf_exception_handler(exc, context)
