"""Shared fixtures: an isolated SQLite database, users and fake collaborators."""

from __future__ import annotations

import os
import sys
import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "plano_acao_api_tests.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from app.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from app.application.use_cases.notifications import ActivityNotification  # noqa: E402
from app.domain.entities import User, UserRole  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.email import TransportResult  # noqa: E402
from app.infrastructure.repositories import UserRepository  # noqa: E402
from app.infrastructure.security import get_password_hash  # noqa: E402

DEFAULT_PASSWORD = "secret123"
_password_hash: str | None = None


def _hashed_default_password() -> str:
    global _password_hash
    if _password_hash is None:
        _password_hash = get_password_hash(DEFAULT_PASSWORD)
    return _password_hash


class RecordingNotifier:
    """Notifier double that keeps every notification it receives."""

    def __init__(self) -> None:
        self.notifications: list[ActivityNotification] = []

    def notify(self, notification: ActivityNotification) -> None:
        self.notifications.append(notification)

    def events(self) -> list[str]:
        return [notification.event_type for notification in self.notifications]


class FakeTransport:
    """Email transport double returning a canned result."""

    def __init__(self, *, configured: bool = True, error: str | None = None) -> None:
        self.configured = configured
        self.error = error
        self.sent: list[tuple[str, str, str]] = []

    def send(self, to: str, subject: str, html_content: str) -> TransportResult:
        self.sent.append((to, subject, html_content))
        if self.error:
            return TransportResult(error=self.error)
        return TransportResult(message_id=f"msg-{len(self.sent)}")


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session() -> Iterator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Return a factory inserting active users that share ``DEFAULT_PASSWORD``."""

    def _make_user(
        email: str, *, name: str | None = None, role: UserRole = UserRole.USER
    ) -> User:
        return UserRepository(session).create(
            User(
                id=None,
                name=name or email.split("@", 1)[0].title(),
                email=email,
                password=_hashed_default_password(),
                role=role,
                is_active=True,
                created_at=None,
                updated_at=None,
            )
        )

    return _make_user


@pytest.fixture()
def owner(make_user) -> User:
    return make_user("owner@example.com", name="Olivia Owner")


@pytest.fixture()
def other_user(make_user) -> User:
    return make_user("other@example.com", name="Oscar Other")


@pytest.fixture()
def admin(make_user) -> User:
    return make_user("admin@example.com", name="Ada Admin", role=UserRole.ADMIN)


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def password() -> str:
    """Plain-text password of every user built by ``make_user``."""

    return DEFAULT_PASSWORD
