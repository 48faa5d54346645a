import re

IDENTIFIER_MIN_LEN = 3
IDENTIFIER_MAX_LEN = 50
PASSWORD_MIN_LEN = 4
PASSWORD_MAX_LEN = 128

# usernames and emails: alphanumerics plus . _ @ -
_IDENTIFIER_CHARS = re.compile(r"^[a-zA-Z0-9._@-]+$")


def validate_identifier(raw) -> tuple[str | None, str | None]:
    """
    Returns (identifier, None) with the trimmed identifier, or
    (None, error_message) naming the first constraint that failed.
    """
    if raw is None:
        return None, "Identifier is required"
    if not isinstance(raw, str):
        return None, "Identifier must be a string"

    identifier = raw.strip()
    if not identifier:
        return None, "Identifier is required"
    if not IDENTIFIER_MIN_LEN <= len(identifier) <= IDENTIFIER_MAX_LEN:
        return None, (
            f"Identifier must be between {IDENTIFIER_MIN_LEN} "
            f"and {IDENTIFIER_MAX_LEN} characters"
        )
    if not _IDENTIFIER_CHARS.match(identifier):
        return None, "Identifier contains invalid characters"

    return identifier, None


def validate_password(raw) -> tuple[str | None, str | None]:
    """
    Returns (password, None) or (None, error_message).
    The password itself is returned untouched: whitespace is significant
    to the hash comparison, only a blank password is rejected.
    """
    if raw is None:
        return None, "Password is required"
    if not isinstance(raw, str):
        return None, "Password must be a string"
    if not raw.strip():
        return None, "Password is required"
    if not PASSWORD_MIN_LEN <= len(raw) <= PASSWORD_MAX_LEN:
        return None, (
            f"Password must be between {PASSWORD_MIN_LEN} "
            f"and {PASSWORD_MAX_LEN} characters"
        )

    return raw, None
