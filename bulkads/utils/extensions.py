# bulkads/utils/extensions.py

import os
from flask import request, g, has_request_context
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .logger import Log


RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")


def _get_client_ip():
    """Safely get client IP, returns 'unknown' if outside request context."""
    if has_request_context():
        return get_remote_address() or "unknown"
    return "unknown"


def log_rate_limit_breach(request_limit):
    """Called by Flask-Limiter whenever any limit is exceeded."""
    client_ip = _get_client_ip()
    user_id = getattr(g, "current_user_id", None) or "anonymous"

    try:
        limit_str = str(request_limit.limit)
    except AttributeError:
        limit_str = "unknown"

    Log.warning(
        f"[RATE_LIMIT_BREACH][{client_ip}] "
        f"user={user_id}, limit={limit_str}, key={getattr(request_limit, 'key', 'unknown')}, "
        f"method={request.method}, path={request.path}, endpoint={request.endpoint or 'unknown'}"
    )


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"],
    storage_uri=RATE_LIMIT_STORAGE_URI,
    on_breach=log_rate_limit_breach,
)
