from flask import Blueprint, current_app, g, jsonify, request

from security.login import BAD_INPUT, INVALID_CREDENTIALS, RATE_LIMITED
from utils.auth_context import token_required


auth_bp = Blueprint("auth", __name__, url_prefix="/api")

_STATUS_BY_KIND = {
    BAD_INPUT: 400,
    INVALID_CREDENTIALS: 401,
    RATE_LIMITED: 429,
}


@auth_bp.post("/login")
def login():
    data = request.get_json(silent=True)
    if data is None and request.get_data(cache=True):
        return jsonify(success=False, error="Invalid JSON in request body"), 400
    if not isinstance(data, dict):
        data = {}

    result = current_app.extensions["login_service"].login(
        data.get("identifier"), data.get("password")
    )

    if result.ok:
        return jsonify(
            success=True,
            message="Login successful",
            user=result.user,
            token=result.token,
        ), 200

    body = {"success": False, "error": result.error}
    if result.kind == RATE_LIMITED:
        body["retryAfter"] = result.retry_after
        body["resetTime"] = result.reset_time
    return jsonify(body), _STATUS_BY_KIND[result.kind]


@auth_bp.get("/me")
@token_required
def me():
    return jsonify(
        success=True,
        user={
            "id": g.user["id"],
            "username": g.user["username"],
            "email": g.user["email"],
        },
    ), 200
