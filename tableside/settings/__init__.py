# tableside/settings/__init__.py
"""
Django settings package for Tableside.

- development: local development and tests, debug enabled, in-memory channel layer
- production: Redis-backed channel layer, JSON logs, Sentry

Settings are loaded based on the ENVIRONMENT variable (default: development).
"""

import os
import sys

ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()

VALID_ENVIRONMENTS = ["development", "production"]
if ENVIRONMENT not in VALID_ENVIRONMENTS:
    raise ValueError(
        f"Invalid ENVIRONMENT '{ENVIRONMENT}'. "
        f"Must be one of: {', '.join(VALID_ENVIRONMENTS)}"
    )

if ENVIRONMENT == "production":
    from .production import *
else:
    from .development import *

ENVIRONMENT_INFO = {
    "name": ENVIRONMENT,
    "debug": DEBUG,
    "allowed_hosts": ALLOWED_HOSTS,
    "database_engine": DATABASES["default"]["ENGINE"],
    "channel_layer": CHANNEL_LAYERS["default"]["BACKEND"],
    "table_count": RESTAURANT_TABLE_COUNT,
}


def validate_settings():
    """Validate critical settings are properly configured."""
    errors = []

    if not SECRET_KEY:
        errors.append("SECRET_KEY must be set to a secure random value")

    if not DATABASES.get("default"):
        errors.append("Database configuration is missing")

    if RESTAURANT_TABLE_COUNT < 1:
        errors.append("RESTAURANT_TABLE_COUNT must be at least 1")

    if ORDERS_POLL_INTERVAL <= 0:
        errors.append("ORDERS_POLL_INTERVAL must be positive")

    if ENVIRONMENT == "production" and globals().get("CORS_ALLOW_ALL_ORIGINS", False):
        errors.append("CORS_ALLOW_ALL_ORIGINS should not be True in production")

    if errors:
        error_msg = "\n".join([f"  - {error}" for error in errors])
        raise ValueError(f"Settings validation failed:\n{error_msg}")


if "collectstatic" not in sys.argv:
    validate_settings()

__all__ = ["ENVIRONMENT_INFO", "validate_settings"]
