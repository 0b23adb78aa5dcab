"""Shared helpers: in-memory SQLite database and an authenticated TestClient."""

import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_session_manager
from app.core.database import get_db
from app.main import app
from app.models import Base, Role, User
from app.services.users import create_user

DEFAULT_PASSWORD = "secret123"


def make_session_factory():
    """Fresh in-memory database shared by every session the factory opens."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine), engine


def session_token(user_id: int, role: str = Role.USER.value) -> str:
    return get_session_manager().codec.issue(user_id, role)


class DatabaseTestCase(unittest.TestCase):
    """Provides self.db bound to a private in-memory database."""

    def setUp(self) -> None:
        self.session_factory, self.engine = make_session_factory()
        self.db: Session = self.session_factory()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def make_user(
        self,
        name: str = "Alice Example",
        email: str = "alice@example.com",
        password: str = DEFAULT_PASSWORD,
        role: Role = Role.USER,
    ) -> User:
        return create_user(self.db, name, email, password, role)

    def reload(self, model, pk):
        """Read a row through a new session so other sessions' commits are visible."""
        with self.session_factory() as fresh:
            return fresh.get(model, pk)


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db uses the same database."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.pop(get_db, None)
        self.client.close()
        super().tearDown()

    def login_as(self, user: User) -> None:
        """Attach a valid session cookie for user (role as currently stored)."""
        self.client.cookies.set(
            get_session_manager().cookie_name, session_token(user.id, user.role)
        )
