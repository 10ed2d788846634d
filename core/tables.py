# core/tables.py
"""
Tables are a fixed, numbered set (1..RESTAURANT_TABLE_COUNT); there is no
table row in the database. Each table's QR code encodes a stable menu link.
"""
from __future__ import annotations

from typing import Any, List, Optional
from urllib.parse import urlencode

from django.conf import settings

from .exceptions import ValidationError

MENU_PATH = "/menu"
TABLE_QUERY_PARAM = "table"


def table_count() -> int:
    return int(getattr(settings, "RESTAURANT_TABLE_COUNT", 20))


def table_numbers() -> List[int]:
    return list(range(1, table_count() + 1))


def parse_table_number(value: Any, *, required: bool = True) -> Optional[int]:
    """
    Coerce a table number from query/body input.

    Returns None for a missing value when ``required`` is False; raises
    ValidationError for anything that is not an integer in 1..N.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError("A table number is required.", field="table_number")
        return None
    if isinstance(value, bool):
        raise ValidationError("Table number must be an integer.", field="table_number")
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError("Table number must be an integer.", field="table_number")
    if not 1 <= number <= table_count():
        raise ValidationError(
            f"Table number must be between 1 and {table_count()}.",
            field="table_number",
        )
    return number


def menu_url(table_number: int, origin: Optional[str] = None) -> str:
    """
    The link printed in a table's QR code: ``<origin>/menu?table=<n>``.

    Stable and unique per table, so printed codes never need reissuing.
    """
    number = parse_table_number(table_number)
    base = (origin or getattr(settings, "SITE_URL", "")).rstrip("/")
    return f"{base}{MENU_PATH}?{urlencode({TABLE_QUERY_PARAM: number})}"


def qr_filename(table_number: int) -> str:
    return f"table-{int(table_number)}-qr-code.png"
