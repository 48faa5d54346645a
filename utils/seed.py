from models.user import UserRecord, UserStore
from security.password import hash_password

# Demo accounts; only the bcrypt hash of each password is kept in memory
DEFAULT_USERS = [
    {"id": 1, "username": "john_doe", "email": "john@example.com", "password": "john123"},
    {"id": 2, "username": "jane_smith", "email": "jane@example.com", "password": "abcde123"},
]


def seed_users(entries=None, rounds: int = 10) -> UserStore:
    """
    Builds the user store. An entry carries either a plain "password"
    (hashed here) or a ready "password_hash".
    """
    records = []
    for entry in entries if entries is not None else DEFAULT_USERS:
        pw_hash = entry.get("password_hash") or hash_password(entry["password"], rounds=rounds)
        records.append(UserRecord(
            id=int(entry["id"]),
            username=entry["username"],
            email=entry["email"],
            password_hash=pw_hash,
        ))
    return UserStore(records)
