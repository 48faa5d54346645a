import pytest

from app import create_app
from config import ConfigurationError
from security.password import verify_password
from tests.conftest import TestingConfig


class NoSecretConfig(TestingConfig):
    JWT_SECRET = None


class BadThresholdConfig(TestingConfig):
    MAX_FAILED_ATTEMPTS = 0


@pytest.mark.parametrize("config", [NoSecretConfig, BadThresholdConfig])
def test_invalid_config_fails_at_startup(config):
    with pytest.raises(ConfigurationError):
        create_app(config)


def test_seed_passwords_are_hashed(app):
    user = app.extensions["user_store"].find_by_identifier("john_doe")
    assert user.password_hash != "john123"
    assert user.password_hash.startswith("$2")
    assert verify_password("john123", user.password_hash)


def test_lookup_is_exact_match(app):
    store = app.extensions["user_store"]
    assert store.find_by_identifier("jane@example.com").id == 2
    assert store.find_by_identifier("JOHN_DOE") is None
    assert store.find_by_identifier("john") is None


def test_custom_seed_with_precomputed_hash(app):
    pw_hash = app.extensions["user_store"].find_by_identifier("john_doe").password_hash

    class CustomSeed(TestingConfig):
        SEED_USERS = [
            {"id": 7, "username": "admin", "email": "admin@example.com", "password_hash": pw_hash},
        ]

    client = create_app(CustomSeed).test_client()
    resp = client.post("/api/login", json={"identifier": "admin", "password": "john123"})
    assert resp.status_code == 200
    assert resp.get_json()["user"]["id"] == 7


def test_hash_password_cli(app):
    result = app.test_cli_runner().invoke(args=["hash-password", "john123"])
    assert result.exit_code == 0
    pw_hash = result.output.split("Hash: ")[1].split()[0]
    assert verify_password("john123", pw_hash)
