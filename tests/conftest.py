"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Point the application engine at SQLite before any project module reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from shared.infrastructure.db import get_db
from shared.security.auth import sign_jwt
from rest_api.models import Base, Province, Branch, Store, WhitelistStore


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_USER = {"sub": 7, "email": "tester@indostore.local"}


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def user_ctx():
    """User context as produced by current_user_context."""
    return dict(TEST_USER)


@pytest.fixture
def auth_headers():
    """Bearer token headers for API calls."""
    token = sign_jwt({"sub": str(TEST_USER["sub"]), "email": TEST_USER["email"]})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_province(db_session):
    """Create an active province."""
    province = Province(name="Bali")
    db_session.add(province)
    db_session.commit()
    db_session.refresh(province)
    return province


@pytest.fixture
def seed_branch(db_session, seed_province):
    """Create an active branch under seed_province."""
    branch = Branch(name="Denpasar", province_id=seed_province.id)
    db_session.add(branch)
    db_session.commit()
    db_session.refresh(branch)
    return branch


@pytest.fixture
def seed_store(db_session, seed_branch):
    """Create an active store under seed_branch."""
    store = Store(name="Store A", address="Jl. Sunset Road No. 1", branch_id=seed_branch.id)
    db_session.add(store)
    db_session.commit()
    db_session.refresh(store)
    return store


@pytest.fixture
def make_store(db_session):
    """Factory inserting stores directly, bypassing the service."""
    def _make(branch, name, address="Jl. Test No. 1", **flags):
        store = Store(name=name, address=address, branch_id=branch.id, **flags)
        db_session.add(store)
        db_session.commit()
        db_session.refresh(store)
        return store

    return _make


@pytest.fixture
def make_whitelist(db_session):
    """Factory inserting whitelist entries directly, bypassing the service."""
    def _make(store):
        entry = WhitelistStore(store_id=store.id)
        db_session.add(entry)
        db_session.commit()
        db_session.refresh(entry)
        return entry

    return _make
