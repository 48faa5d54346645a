import logging

import click
from flask import Flask, current_app, jsonify, request

from config import Config, validate_config
from routes import health_bp, auth_bp
from security.bruteforce import LoginAttemptLimiter
from security.login import LoginService
from security.password import hash_password
from security.rate_limit import IpRateLimiter, client_ip
from security.tokens import TokenIssuer
from utils.error_handlers import register_error_handlers
from utils.log_setup import configure_logging
from utils.seed import seed_users

logger = logging.getLogger(__name__)

RATE_LIMITED_PREFIX = "/api/"


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    configure_logging(app)
    validate_config(app.config)

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)

    # In-memory state, built once per process and injected via app.extensions
    users = seed_users(app.config.get("SEED_USERS"), rounds=app.config["BCRYPT_ROUNDS"])
    ip_limiter = IpRateLimiter(
        max_requests=app.config["IP_RATE_MAX_REQUESTS"],
        window_seconds=app.config["IP_RATE_WINDOW_SECONDS"],
    )
    login_limiter = LoginAttemptLimiter(
        max_attempts=app.config["MAX_FAILED_ATTEMPTS"],
        window_seconds=app.config["FAILED_ATTEMPTS_WINDOW_SECONDS"],
    )
    token_issuer = TokenIssuer(
        app.config["JWT_SECRET"],
        expiration_hours=app.config["JWT_EXPIRATION_HOURS"],
        algorithm=app.config["JWT_ALGORITHM"],
    )

    app.extensions["user_store"] = users
    app.extensions["ip_limiter"] = ip_limiter
    app.extensions["login_limiter"] = login_limiter
    app.extensions["token_issuer"] = token_issuer
    app.extensions["login_service"] = LoginService(users, login_limiter, token_issuer)

    @app.before_request
    def _ip_rate_limit():
        # Runs before the request is logged, so a flood produces one warning only
        if not request.path.startswith(RATE_LIMITED_PREFIX):
            return None

        allowed, retry_after = current_app.extensions["ip_limiter"].check_ip_limit(
            client_ip(request)
        )
        if not allowed:
            return jsonify(
                success=False,
                error="Too many requests. Please slow down.",
                retryAfter=retry_after,
            ), 429

        logger.info("%s %s", request.method, request.path)
        return None

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_error_handlers(app)
    register_cli(app)

    logger.info("Loaded %d user accounts", len(users))
    return app

#-------------------------

def register_cli(app):
    @app.cli.command("hash-password")
    @click.argument("password")
    def hash_password_command(password):
        """Print a bcrypt hash to paste into SEED_USERS."""
        try:
            pw_hash = hash_password(password, rounds=app.config["BCRYPT_ROUNDS"])
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="PASSWORD")

        click.echo(f"Hash: {pw_hash}")
        click.echo("Use this hash as password_hash in SEED_USERS")

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=4000)
