import os
import sys
from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from backend.app.auth.dependencies import AuthenticatedUser, get_current_user  # noqa: E402
from backend.app.auth.jwt import create_access_token  # noqa: E402
from backend.app.database import get_db  # noqa: E402
from backend.app.main import create_app  # noqa: E402
from backend.app.models import User  # noqa: E402

AUTH_HEADERS = {"Authorization": "Bearer fake"}


@pytest.fixture
def test_app_client(test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
    db_url, TestingSessionLocal, engine = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client, TestingSessionLocal


@pytest.fixture
def authorized_client(
    test_app_client,
) -> Iterator[tuple[TestClient, Callable[[], AuthenticatedUser], sessionmaker]]:
    client, TestingSessionLocal = test_app_client
    session = TestingSessionLocal()
    user = User(
        name="Tester",
        email="tester@example.com",
        avatar="//www.gravatar.com/avatar/tester",
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    session.close()

    identity = AuthenticatedUser(id=user.id)

    def override_current_user() -> AuthenticatedUser:
        return identity

    client.app.dependency_overrides[get_current_user] = override_current_user

    yield client, override_current_user, TestingSessionLocal

    client.app.dependency_overrides.pop(get_current_user, None)


@pytest.fixture
def token_for() -> Callable[[int], str]:
    """Issue a real signed token for a user id."""

    def _issue(user_id: int) -> str:
        return create_access_token({"sub": str(user_id)})

    return _issue
