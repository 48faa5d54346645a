import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class ConfigurationError(RuntimeError):
    """Raised at startup when the app cannot be served safely."""


class Config:
    # Secrets (required, checked by validate_config)
    JWT_SECRET = os.getenv("JWT_SECRET")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")

    # 24 hours token lifetime
    JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))

    # bcrypt cost used when hashing the seed accounts
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))

    # Brute-force protection (failed logins per identifier)
    MAX_FAILED_ATTEMPTS = int(os.getenv("MAX_FAILED_ATTEMPTS", "5"))
    FAILED_ATTEMPTS_WINDOW_SECONDS = int(os.getenv("FAILED_ATTEMPTS_WINDOW_SECONDS", "300"))

    # Simple IP rate limit for the API
    IP_RATE_WINDOW_SECONDS = int(os.getenv("IP_RATE_WINDOW_SECONDS", "60"))
    IP_RATE_MAX_REQUESTS = int(os.getenv("IP_RATE_MAX_REQUESTS", "20"))

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("LOG_FILE", os.path.join(BASE_DIR, "logs", "backend.log"))

    # Stack traces in server-side error logs
    DIAGNOSTICS = os.getenv("APP_ENV", "production").lower() == "development"

    # Demo accounts; None means utils.seed.DEFAULT_USERS
    SEED_USERS = None

    # Basic app settings
    DEBUG = False


_POSITIVE_INT_KEYS = (
    "JWT_EXPIRATION_HOURS",
    "BCRYPT_ROUNDS",
    "MAX_FAILED_ATTEMPTS",
    "FAILED_ATTEMPTS_WINDOW_SECONDS",
    "IP_RATE_WINDOW_SECONDS",
    "IP_RATE_MAX_REQUESTS",
)


def validate_config(config) -> None:
    """
    Fails fast on settings that would make the login endpoint unsafe.
    Called once from create_app, never from a request handler.
    """
    secret = config.get("JWT_SECRET")
    if not isinstance(secret, str) or not secret.strip():
        raise ConfigurationError("JWT_SECRET not configured")

    for key in _POSITIVE_INT_KEYS:
        value = config.get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError(f"{key} must be a positive integer")
