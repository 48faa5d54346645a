from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    id: int
    username: str
    email: str
    password_hash: str

    def public_profile(self) -> dict:
        # Never include the hash in anything that leaves the process
        return {"id": self.id, "username": self.username, "email": self.email}


class UserStore:
    """
    Read-only, in-memory credential store seeded at process start.
    Lookup is an exact match on username OR email.
    """

    def __init__(self, users: Iterable[UserRecord]):
        self._users = tuple(users)
        self._by_identifier: dict[str, UserRecord] = {}
        for user in self._users:
            for key in (user.username, user.email):
                if key in self._by_identifier:
                    raise ValueError(f"Duplicate username or email: {key}")
                self._by_identifier[key] = user

    def find_by_identifier(self, identifier: str) -> UserRecord | None:
        if not isinstance(identifier, str):
            return None
        return self._by_identifier.get(identifier)

    def __len__(self) -> int:
        return len(self._users)
