"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Seeded companies, jobs and users
- Admin / non-admin auth headers
"""

import os

# Settings are read at import time, so these must be set before importing the app
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("BCRYPT_WORK_FACTOR", "4")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db, init_db, metadata
from app.core.security import create_token
from app.crud import company as company_crud
from app.crud import job as job_crud
from app.crud import user as user_crud
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    init_db(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
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
def companies(db_session):
    """Three companies: c1 (1 employee), c2 (2), c3 (3)"""
    return [
        company_crud.create(db_session, {
            "handle": f"c{n}",
            "name": f"C{n}",
            "description": f"Desc{n}",
            "numEmployees": n,
            "logoUrl": f"http://c{n}.img",
        })
        for n in (1, 2, 3)
    ]


@pytest.fixture
def jobs(db_session, companies):
    """
    Three jobs: j1 and j2 at c1, j3 at c2.

    Only j1 has non-zero equity.
    """
    return [
        job_crud.create(db_session, {"title": "J1", "salary": 100, "equity": 0.1, "companyHandle": "c1"}),
        job_crud.create(db_session, {"title": "J2", "salary": 200, "equity": 0, "companyHandle": "c1"}),
        job_crud.create(db_session, {"title": "J3", "salary": 300, "equity": None, "companyHandle": "c2"}),
    ]


@pytest.fixture
def sample_company_data():
    """Sample company data for testing"""
    return {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 1,
        "logoUrl": "http://new.img",
    }


@pytest.fixture
def admin_user(db_session):
    return user_crud.register(db_session, {
        "username": "admin",
        "password": "password1",
        "firstName": "Ada",
        "lastName": "Admin",
        "email": "admin@example.com",
    }, is_admin=True)


@pytest.fixture
def regular_user(db_session):
    return user_crud.register(db_session, {
        "username": "u1",
        "password": "password1",
        "firstName": "U1F",
        "lastName": "U1L",
        "email": "user1@example.com",
    })


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {create_token(admin_user)}"}


@pytest.fixture
def user_headers(regular_user):
    return {"Authorization": f"Bearer {create_token(regular_user)}"}
