from functools import wraps
from flask import current_app, g, request

from security.tokens import InvalidToken


def load_current_user():
    """
    Verifies the bearer token and exposes its claims as g.user.
    Raises a TokenError, turned into a 401 by the app's error handler.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise InvalidToken("Missing or invalid authorization header")

    token = auth_header[len("Bearer "):].strip()
    g.user = current_app.extensions["token_issuer"].verify(token)
    return g.user


def token_required(fn):
    @wraps(fn)
    def wrapper(*args, **kwargs):
        load_current_user()
        return fn(*args, **kwargs)
    return wrapper
