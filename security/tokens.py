from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from config import ConfigurationError


class TokenError(Exception):
    message = "Invalid token"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class InvalidToken(TokenError):
    message = "Invalid token"


class ExpiredToken(TokenError):
    message = "Token has expired"


class TokenIssuer:
    """
    Signs and verifies stateless JWTs carrying {id, username, email}.
    Nothing is stored server-side; validity is signature + expiry only.
    """

    def __init__(self, secret: str, expiration_hours: int = 24, algorithm: str = "HS256"):
        if not secret:
            raise ConfigurationError("JWT_SECRET not configured")
        self._secret = secret
        self.expiration = timedelta(hours=expiration_hours)
        self.algorithm = algorithm

    def issue(self, claims: dict, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "id": claims["id"],
            "username": claims["username"],
            "email": claims["email"],
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expiration).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        """Decode and validate a token. Raises InvalidToken or ExpiredToken."""
        if not token or not isinstance(token, str):
            raise InvalidToken()
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise ExpiredToken()
        except JWTError:
            raise InvalidToken()
