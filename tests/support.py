"""Shared test scaffolding: the real app wired to a throwaway in-memory SQLite database."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ratestore.api.auth import get_token_service
from ratestore.core.config import get_settings
from ratestore.core.database import get_db
from ratestore.core.security import TokenService
from ratestore.main import app
from ratestore.models import Base, Role, Store, User
from ratestore.services.accounts import create_account
from ratestore.services.stores import create_store_with_owner

TEST_SECRET = "unit-test-secret-not-for-production"
VALID_PASSWORD = "Abcdefg1!"
SIGNUP_NAME = "Normal User Name For Tests"  # 26 chars, within signup's 20-60


def make_engine():
    """In-memory SQLite shared across threads (TestClient runs handlers in a threadpool)."""
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema per test; self.db is a session for setup and assertions."""

    def setUp(self) -> None:
        self.engine = make_engine()
        Base.metadata.create_all(self.engine)
        self.session_factory = sessionmaker(bind=self.engine, autoflush=False)
        self.db: Session = self.session_factory()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def make_account(
        self,
        email: str,
        role: Role = Role.NORMAL_USER,
        name: str = SIGNUP_NAME,
        password: str = VALID_PASSWORD,
        address: str = "12 Test Street",
    ) -> User:
        return create_account(
            self.db,
            name=name,
            email=email,
            password=password,
            address=address,
            role=role,
        )

    def make_store(self, owner_email: str, store_email: str, name: str = "Corner Shop") -> Store:
        return create_store_with_owner(
            self.db,
            owner_name="Store Owner",
            owner_email=owner_email,
            owner_password=VALID_PASSWORD,
            owner_address="1 Owner Road",
            store_name=name,
            store_email=store_email,
            store_address="1 Market Square",
        )

    def count(self, model) -> int:
        self.db.expire_all()
        return self.db.query(model).count()


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db and token service are overridden."""

    def setUp(self) -> None:
        super().setUp()
        self.tokens = TokenService(secret=TEST_SECRET, expire_minutes=60)

        def override_get_db():
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_token_service] = lambda: self.tokens
        self.client = TestClient(app)
        self.cookie_name = get_settings().COOKIE_NAME
        self.api = get_settings().API_PREFIX

    def tearDown(self) -> None:
        self.client.close()
        app.dependency_overrides.clear()
        super().tearDown()

    def login_as(self, user: User) -> None:
        """Attach a session cookie for user to subsequent requests."""
        self.client.cookies.set(self.cookie_name, self.tokens.issue(user.id, user.role))

    def logout(self) -> None:
        self.client.cookies.clear()
