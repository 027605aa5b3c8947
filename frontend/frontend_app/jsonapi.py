"""Small helpers shared by the JSON views."""
import json
import logging
import re
from functools import wraps

from django.db import DatabaseError
from django.http import JsonResponse

logger = logging.getLogger(__name__)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


class ApiError(Exception):
    """Raised inside a ``json_api`` view to answer ``{"error": message}``."""

    def __init__(self, message, status=400, details=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.details = details


def json_error(message, status, details=None):
    body = {"error": message}
    if details:
        body["details"] = details
    return JsonResponse(body, status=status)


def json_api(view):
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except ApiError as e:
            return json_error(e.message, e.status, e.details)
        except DatabaseError:
            logger.exception(f"Database error in {view.__name__}")
            return json_error("Internal error", status=500)
    return wrapper


def parse_json_body(request):
    if not request.body:
        return {}
    try:
        body = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ApiError("Request body must be valid JSON") from e
    if not isinstance(body, dict):
        raise ApiError("Request body must be a JSON object")
    return body


def snake_case_keys(payload):
    """``{"doctorName": ...}`` -> ``{"doctor_name": ...}``."""
    return {_CAMEL_RE.sub("_", key).lower(): value for key, value in payload.items()}


def validated(form):
    """Return ``form.cleaned_data`` or raise an ``ApiError`` naming the first problem."""
    if form.is_valid():
        return form.cleaned_data
    errors = form.errors.get_json_data()
    first = next(iter(errors.values()))[0]["message"]
    raise ApiError(first, status=400, details=errors)
