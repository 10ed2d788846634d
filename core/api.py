# core/api.py
from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .exceptions import NotFound, PersistenceError, TablesideError, ValidationError

logger = logging.getLogger(__name__)


def exception_handler(exc, context):
    """
    DRF exception handler that understands the application error taxonomy.

    ValidationError -> 400, NotFound -> 404, PersistenceError -> 503 with a
    generic retry message. Everything else falls through to DRF.
    """
    if isinstance(exc, ValidationError):
        body = {"error": exc.message}
        if exc.field:
            body["field"] = exc.field
        return Response(body, status=status.HTTP_400_BAD_REQUEST)

    if isinstance(exc, NotFound):
        return Response({"error": exc.message}, status=status.HTTP_404_NOT_FOUND)

    if isinstance(exc, PersistenceError):
        view = context.get("view")
        logger.error(
            "Persistence failure in %s: %s",
            view.__class__.__name__ if view else "unknown view",
            exc.__cause__ or exc,
        )
        return Response(
            {"error": PersistenceError.default_message, "retry": True},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    if isinstance(exc, TablesideError):
        return Response({"error": exc.message}, status=status.HTTP_400_BAD_REQUEST)

    return drf_exception_handler(exc, context)
