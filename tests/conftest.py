"""
Pytest fixtures for the profile service tests.

Every test gets a fresh in-memory SQLite database built from the ORM models.
"""

import os

# Must be set before core.config caches settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-long-enough-0123456789")
os.environ.setdefault("ENV", "test")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import core.models  # noqa: F401,E402  # registers tables on Base.metadata
from core.db import Base, enable_sqlite_foreign_keys  # noqa: E402


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    db_url = "sqlite://"
    engine = create_engine(
        db_url,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(
        bind=engine, autoflush=False, autocommit=False, expire_on_commit=False
    )

    yield db_url, TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture
def sample_profile_payload():
    """Body of a create-or-update profile request."""
    return {
        "company": "Acme",
        "website": "https://acme.dev",
        "location": "Boston, MA",
        "bio": "Full stack developer",
        "status": "Developer",
        "githubusername": "octocat",
        "skills": "python, react ,sql",
        "twitter": "https://twitter.com/octocat",
        "linkedin": "https://linkedin.com/in/octocat",
    }


@pytest.fixture
def sample_experience_payload():
    return {
        "title": "Senior Developer",
        "company": "Acme",
        "location": "Remote",
        "from": "2019-06-01",
        "to": "",
        "current": True,
        "description": "Built things",
    }


@pytest.fixture
def sample_education_payload():
    return {
        "school": "State University",
        "degree": "BSc",
        "fieldofstudy": "Computer Science",
        "from": "2012-09-01",
        "to": "2016-06-01",
        "current": False,
    }

