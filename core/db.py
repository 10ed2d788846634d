# core/db.py
from __future__ import annotations

import logging
from contextlib import contextmanager

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError

from .exceptions import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


def _first_message(exc: DjangoValidationError) -> tuple[str, str | None]:
    if hasattr(exc, "message_dict"):
        for field, messages in exc.message_dict.items():
            if messages:
                return str(messages[0]), (None if field == "__all__" else field)
    messages = getattr(exc, "messages", None) or [str(exc)]
    return str(messages[0]), None


@contextmanager
def persistence_guard(action: str):
    """
    Translate database failures raised inside the block.

    DatabaseError -> PersistenceError (the caller shows a retry prompt);
    model ``full_clean`` failures -> ValidationError.
    """
    try:
        yield
    except DjangoValidationError as exc:
        message, field = _first_message(exc)
        raise ValidationError(message, field=field) from exc
    except DatabaseError as exc:
        logger.error("Database rejected %s: %s", action, exc)
        raise PersistenceError() from exc
