# bulkads/utils/rate_limits.py

from flask import g
from flask_limiter.util import get_remote_address

from .extensions import limiter


def user_key_func():
    """Rate-limit per authenticated user, falling back to the client IP."""
    user_id = getattr(g, "current_user_id", None)
    if user_id is not None:
        return f"user:{user_id}"
    return get_remote_address()


def crud_write_limiter(
    entity_name: str,
    limit_str: str = "20 per minute; 200 per hour",
    scope: str | None = None,
):
    """
    Shared limiter for write (POST/PUT/PATCH) endpoints.

    Example:
        @crud_write_limiter("campaign_import", "5 per minute; 50 per hour")
    """
    scope = scope or f"{entity_name}-write"
    error_message = f"Too many {entity_name} write requests. Please try again later."

    return limiter.shared_limit(
        limit_str,
        scope=scope,
        key_func=user_key_func,
        methods=["POST", "PUT", "PATCH"],
        error_message=error_message,
    )
