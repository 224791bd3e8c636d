# bulkads/utils/auth.py

import jwt
from functools import wraps
from flask import current_app, g, request
from flask_smorest import abort

from ..constants.service_code import AUTHENTICATION_MESSAGES
from .logger import Log


def token_required(f):
    """
    Require `Authorization: Bearer <jwt>` signed with SECRET_KEY (HS256).
    The decoded claims land on g.current_user; `user_id` is mandatory.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        auth_header = request.headers.get("Authorization")

        if not auth_header or not auth_header.startswith("Bearer "):
            abort(401, message=AUTHENTICATION_MESSAGES["AUTHENTICATION_REQUIRED"])

        token = auth_header.split()[1] if len(auth_header.split()) > 1 else ""
        log_tag = "[auth.py][token_required]"

        try:
            data = jwt.decode(token, current_app.config["SECRET_KEY"], algorithms=["HS256"])
        except jwt.ExpiredSignatureError:
            abort(401, message=AUTHENTICATION_MESSAGES["TOKEN_EXPIRED"])
        except jwt.InvalidTokenError as e:
            Log.info(f"{log_tag} invalid token: {e}")
            abort(401, message=AUTHENTICATION_MESSAGES["INVALID_TOKEN"])

        user_id = data.get("user_id")
        if not user_id:
            abort(401, message=AUTHENTICATION_MESSAGES["INVALID_TOKEN"])

        g.current_user = {**data, "user_id": str(user_id)}
        g.current_user_id = str(user_id)

        return f(*args, **kwargs)
    return decorated
