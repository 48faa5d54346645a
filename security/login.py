import logging
from dataclasses import dataclass

from models.user import UserRecord, UserStore
from security.bruteforce import LoginAttemptLimiter
from security.password import verify_password
from security.tokens import TokenIssuer
from security.validation import validate_identifier, validate_password

logger = logging.getLogger(__name__)

SUCCESS = "success"
BAD_INPUT = "bad_input"
INVALID_CREDENTIALS = "invalid_credentials"
RATE_LIMITED = "rate_limited"

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"
TOO_MANY_ATTEMPTS_MESSAGE = "Too many failed login attempts. Please try again later."


@dataclass
class LoginResult:
    kind: str
    user: dict | None = None
    token: str | None = None
    error: str | None = None
    retry_after: int = 0
    reset_time: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind == SUCCESS


def _isoformat(dt) -> str:
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LoginService:
    """
    Runs one login attempt: validate, lockout gate, lookup, password
    check, then token issuance. Failures come back as a LoginResult
    rather than an exception; only unexpected errors propagate.
    """

    def __init__(self, users: UserStore, attempts: LoginAttemptLimiter, tokens: TokenIssuer):
        self.users = users
        self.attempts = attempts
        self.tokens = tokens

    def login(self, raw_identifier, raw_password) -> LoginResult:
        identifier, error = validate_identifier(raw_identifier)
        if error is None:
            password, error = validate_password(raw_password)
        if error is not None:
            logger.warning("Login rejected: %s", error)
            return LoginResult(BAD_INPUT, error=error)

        # Holds a slot until the outcome below is recorded
        allowed, retry_after, reset_at = self.attempts.reserve_attempt(identifier)
        if not allowed:
            logger.warning("Login blocked for %s: too many failed attempts", identifier)
            return LoginResult(
                RATE_LIMITED,
                error=TOO_MANY_ATTEMPTS_MESSAGE,
                retry_after=retry_after,
                reset_time=_isoformat(reset_at),
            )

        try:
            user, reason = self._authenticate(identifier, password)
        except Exception:
            self.attempts.release_attempt(identifier)
            raise

        if user is None:
            return self._failure(identifier, reason)

        self.attempts.clear_attempts(identifier)
        profile = user.public_profile()
        token = self.tokens.issue(profile)

        logger.info("User logged in: %s (%s)", user.username, user.email)
        return LoginResult(SUCCESS, user=profile, token=token)

    def _authenticate(self, identifier: str, password: str) -> tuple[UserRecord | None, str]:
        user = self.users.find_by_identifier(identifier)
        if user is None:
            return None, "unknown identifier"
        if not verify_password(password, user.password_hash):
            return None, "wrong password"
        return user, ""

    def _failure(self, identifier: str, reason: str) -> LoginResult:
        # Same result for both reasons; only the server log tells them apart
        fail_count = self.attempts.record_failed_attempt(identifier, reserved=True)
        logger.warning("Login failed for %s: %s (attempt %d)", identifier, reason, fail_count)
        return LoginResult(INVALID_CREDENTIALS, error=INVALID_CREDENTIALS_MESSAGE)
