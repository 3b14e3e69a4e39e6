"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest

from shared.config import Settings, get_settings
from shared.database import reset_client_cache
from api.dependencies import reset_container
from modules.auth.service import reset_token_service
from modules.mail.service import reset_email_service


# Test signing secrets (only for testing)
TEST_ACCESS_SECRET = "test-access-secret-for-testing-only"
TEST_REFRESH_SECRET = "test-refresh-secret-for-testing-only"

# Fixed point in time used by fake clocks (2024-01-01T00:00:00Z)
T0 = 1_704_067_200.0


def make_settings(**overrides) -> Settings:
    """
    Build Settings for tests without reading .env.

    bcrypt runs at its minimum cost so hashing stays fast.
    """
    values = {
        "jwt_access_secret": TEST_ACCESS_SECRET,
        "jwt_refresh_secret": TEST_REFRESH_SECRET,
        "bcrypt_rounds": 4,
        "account_store_backend": "memory",
        "email_mode": "console",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeClock:
    """Callable clock returning unix seconds; advance it by hand."""

    def __init__(self, now: float = T0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingMailer:
    """IMailer that records messages instead of sending them."""

    def __init__(self, error: Exception | None = None):
        self.sent: list[tuple[str, str, str]] = []
        self.error = error

    async def send_verification_code(self, to_email: str, first_name: str, code: str) -> None:
        self._record("verification", to_email, code)

    async def send_password_reset_code(self, to_email: str, first_name: str, code: str) -> None:
        self._record("password_reset", to_email, code)

    def _record(self, kind: str, to_email: str, code: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((kind, to_email, code))

    @property
    def last_code(self) -> str:
        return self.sent[-1][2]


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings, clients and services before and after each test."""
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    reset_token_service()
    reset_email_service()
    yield
    get_settings.cache_clear()
    reset_client_cache()
    reset_container()
    reset_token_service()
    reset_email_service()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with test secrets and the in-memory store."""
    return make_settings()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def settings_factory():
    """Build Settings with test defaults plus overrides."""
    return make_settings


@pytest.fixture
def mailer_factory():
    """Build a RecordingMailer, optionally one that fails every send."""
    return RecordingMailer
