import logging

from flask import current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from security.tokens import TokenError

logger = logging.getLogger(__name__)


def register_error_handlers(app):
    @app.errorhandler(TokenError)
    def _token_error(err):
        logger.warning("%s %s rejected: %s", request.method, request.path, err.message)
        return jsonify(success=False, error=err.message), 401

    @app.errorhandler(HTTPException)
    def _http_error(err):
        return jsonify(success=False, error=err.description), err.code

    @app.errorhandler(Exception)
    def _unexpected(err):
        # Full detail stays server-side; the caller only sees a generic 500
        if current_app.config.get("DIAGNOSTICS"):
            logger.exception("%s %s failed", request.method, request.path)
        else:
            logger.error("%s %s failed: %s: %s", request.method, request.path,
                         type(err).__name__, err)
        return jsonify(success=False, error="Internal server error"), 500
