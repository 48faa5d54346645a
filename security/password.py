import bcrypt

MIN_ROUNDS = 4
MAX_ROUNDS = 31


def _utf8(value: str) -> bytes:
    return value.encode("utf-8")


def hash_password(plain_password: str, rounds: int = 10) -> str:
    """
    One-way bcrypt hash for the seed store and the hash-password command.
    Raises ValueError for an empty password, a cost outside bcrypt's range,
    or a password bcrypt will not accept (over 72 bytes).
    """
    if not isinstance(plain_password, str) or not plain_password:
        raise ValueError("Password must be a non-empty string")
    if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
        raise ValueError(f"bcrypt rounds must be between {MIN_ROUNDS} and {MAX_ROUNDS}")

    return bcrypt.hashpw(_utf8(plain_password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Constant-time comparison; any unusable input is a mismatch."""
    if not isinstance(plain_password, str) or not isinstance(password_hash, str):
        return False
    if not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(_utf8(plain_password), _utf8(password_hash))
    except ValueError:
        return False
