"""
pytest configuration - one app per test with a fast bcrypt cost and a
controllable clock shared by both rate limiters.
"""
import pytest

from app import create_app
from config import Config


class TestingConfig(Config):
    TESTING = True
    JWT_SECRET = "test-secret-do-not-use"
    BCRYPT_ROUNDS = 4
    LOG_FILE = None
    DIAGNOSTICS = False


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app(clock):
    app = create_app(TestingConfig)
    app.extensions["ip_limiter"].clock = clock
    app.extensions["login_limiter"].clock = clock
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(identifier, password, ip="10.0.0.1"):
        return client.post(
            "/api/login",
            json={"identifier": identifier, "password": password},
            environ_base={"REMOTE_ADDR": ip},
        )
    return _login
