"""
Error taxonomy shared by the menu, ordering and live-update layers.

Write paths raise these to the caller (the API layer turns them into
responses); background reloads catch PersistenceError and keep the last
good snapshot.
"""
from __future__ import annotations


class TablesideError(Exception):
    """Base class for application errors."""

    default_message = "Something went wrong."

    def __init__(self, message: str | None = None, *, field: str | None = None):
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)


class ValidationError(TablesideError):
    """Malformed or missing input (e.g. no table number on submit)."""

    default_message = "Invalid input."


class InvalidTransition(ValidationError):
    """A lifecycle write that the order's current state does not allow."""

    default_message = "This order cannot move to the requested state."


class NotFound(TablesideError):
    default_message = "Not found."


class PersistenceError(TablesideError):
    """The database rejected a read or a write."""

    default_message = "Could not save your changes. Please try again."


class SubscriptionError(TablesideError):
    """A live view could not join the change feed."""

    default_message = "Live updates are unavailable."
