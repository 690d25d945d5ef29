# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import itertools
import os
from datetime import datetime, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, enable_sqlite_foreign_keys, get_db
from app.dependencies import get_now
from app.models.property import Property, Unit
from app.models.user import User, UserRole
from app.models.visitor_pass import VisitorPass, VisitorPassStatus
from app.security.auth import create_access_token


NOW = datetime(2026, 5, 1, 12, 0, 0)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FrozenClock:
    """Mutable stand-in for the request clock."""

    def __init__(self, now: datetime):
        self.now = now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FrozenClock(NOW)


@pytest.fixture
def client(db, clock):
    """Test client wired to the test database and the frozen clock."""

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: clock.now
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_user(db, username: str, role: UserRole) -> User:
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash="!",
        full_name=username.title(),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin(db):
    return _make_user(db, "admin", UserRole.ADMIN)


@pytest.fixture
def manager(db):
    return _make_user(db, "manager", UserRole.MANAGER)


@pytest.fixture
def guard(db):
    return _make_user(db, "guard", UserRole.SECURITY)


@pytest.fixture
def viewer(db):
    return _make_user(db, "viewer", UserRole.VIEWER)


@pytest.fixture
def auth_headers():
    """Build a bearer header for a user."""

    def _headers(user: User) -> dict:
        token = create_access_token(user.id, user.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def prop(db):
    prop = Property(name="Sunset Towers", address="1 Harbour Road")
    db.add(prop)
    db.commit()
    db.refresh(prop)
    return prop


@pytest.fixture
def unit(db, prop):
    unit = Unit(property_id=prop.id, unit_number="4B")
    db.add(unit)
    db.commit()
    db.refresh(unit)
    return unit


@pytest.fixture
def make_pass(db, prop, manager):
    """Insert a visitor pass directly, valid around NOW unless overridden."""
    counter = itertools.count(1)

    def _make(**overrides) -> VisitorPass:
        values = dict(
            property_id=prop.id,
            code=f"PASS{next(counter):04d}",
            starts_at=NOW - timedelta(hours=1),
            ends_at=NOW + timedelta(hours=8),
            max_uses=1,
            used_count=0,
            status=VisitorPassStatus.ACTIVE,
            created_by=manager.id,
        )
        values.update(overrides)
        visitor_pass = VisitorPass(**values)
        db.add(visitor_pass)
        db.commit()
        db.refresh(visitor_pass)
        return visitor_pass

    return _make
