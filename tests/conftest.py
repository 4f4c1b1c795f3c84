"""
Pytest configuration and fixtures for Borsa dashboard tests
"""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import update

from borsa_dashboard.catalog import default_catalog
from borsa_dashboard.db import Database, Tier, UserAccount
from borsa_dashboard.services import AuthService, SubscriptionWorkflow

# In-memory SQLite shared across threads through StaticPool
TEST_DATABASE_URL = "sqlite://"


class FakeClock:
    """Settable clock for services that take clock=..."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db():
    """
    Fresh in-memory database with all tables
    """
    database = Database(TEST_DATABASE_URL)
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def auth(db, clock) -> AuthService:
    """Auth service with a cheap hash so tests stay fast"""
    return AuthService(db, secret_key="test-secret", clock=clock, hash_iterations=1_000)


@pytest.fixture
def workflow(db, clock) -> SubscriptionWorkflow:
    return SubscriptionWorkflow(db, plan_duration=timedelta(days=30), clock=clock)


def make_account(db: Database, auth: AuthService, name: str, *, tier: Tier = Tier.FREE,
                 is_admin: bool = False) -> UserAccount:
    account = auth.sign_up(f"{name}@example.com", "secret123", name.title(), name)
    if tier != Tier.FREE or is_admin:
        with db.session() as session:
            session.connection().execute(
                update(UserAccount)
                .where(UserAccount.id == account.id)
                .values(tier=tier, is_admin=is_admin)
            )
        account.tier = tier
        account.is_admin = is_admin
    return account


@pytest.fixture
def user(db, auth) -> UserAccount:
    return make_account(db, auth, "ayse")


@pytest.fixture
def admin(db, auth) -> UserAccount:
    return make_account(db, auth, "admin", is_admin=True)
