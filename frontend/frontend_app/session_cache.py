"""
Time-boxed cache for the authenticated-session lookup.

Resolving ``request.user`` costs a session and a user query per request;
API views resolve it through ``django.core.cache`` instead, keyed by user.
A cached user is only served to a session whose stored auth hash still
matches it, so a password change locks out every other session at once.
Entries live for ``SESSION_CACHE_SECONDS`` unless explicitly invalidated
(logout, profile change, password change, account deletion).
"""
from functools import wraps

from django.conf import settings
from django.contrib.auth import HASH_SESSION_KEY, SESSION_KEY
from django.core.cache import cache
from django.utils.crypto import constant_time_compare

from .jsonapi import json_error

CACHE_PREFIX = "session-user:"


def cache_key(user_id):
    return f"{CACHE_PREFIX}{user_id}"


def get_cached_user(request):
    user_id = request.session.get(SESSION_KEY)
    if user_id is None:
        return None
    user = cache.get(cache_key(user_id))
    session_hash = request.session.get(HASH_SESSION_KEY)
    if user is not None and session_hash and constant_time_compare(session_hash, user.get_session_auth_hash()):
        return user
    if not request.user.is_authenticated:
        return None
    cache.set(cache_key(request.user.pk), request.user, settings.SESSION_CACHE_SECONDS)
    return request.user


def invalidate_cached_user(user_id):
    """Drop the cached user for all of its sessions."""
    if user_id is not None:
        cache.delete(cache_key(user_id))


def api_login_required(view):
    """Like ``login_required`` but answers 401 JSON instead of redirecting."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        user = get_cached_user(request)
        if user is None:
            return json_error("Unauthorized", status=401)
        request.user = user
        return view(request, *args, **kwargs)
    return wrapper
