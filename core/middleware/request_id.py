import uuid
import logging
from threading import local

from django.utils.deprecation import MiddlewareMixin

# Thread-local storage for request ID
_thread_locals = local()

REQUEST_ID_HEADER = "HTTP_X_REQUEST_ID"


def _clean_inbound(value):
    value = (value or "").strip()
    # Accept proxy-issued ids, but not arbitrary blobs
    if value and len(value) <= 64 and all(c.isalnum() or c in "-_." for c in value):
        return value
    return None


class RequestIDMiddleware(MiddlewareMixin):
    """
    Stamp each request with an id, reusing X-Request-ID from a proxy when it
    looks sane, and expose it to logging for the lifetime of the request.
    """

    def process_request(self, request):
        request_id = _clean_inbound(request.META.get(REQUEST_ID_HEADER)) or str(uuid.uuid4())
        request.request_id = request_id
        _thread_locals.request_id = request_id
        return None

    def process_response(self, request, response):
        if hasattr(request, "request_id"):
            response["X-Request-ID"] = request.request_id
        clear_request_id()
        return response

    def process_exception(self, request, exception):
        clear_request_id()
        return None


def get_request_id():
    """Current request id, or None outside a request."""
    return getattr(_thread_locals, "request_id", None)


def clear_request_id():
    if hasattr(_thread_locals, "request_id"):
        delattr(_thread_locals, "request_id")


class RequestIDFilter(logging.Filter):
    """
    Logging filter that adds request ID to log records.
    """

    def filter(self, record):
        record.request_id = get_request_id() or "-"
        return True
