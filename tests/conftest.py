# ruff: noqa: E402
import os
from pathlib import Path
from typing import Any

import pytest

TEST_DB_PATH = Path(__file__).resolve().parent / "test.db"

# Set testing environment flags before importing the app or settings
os.environ["APP_ENV"] = "test"
os.environ.setdefault("TEST_DATABASE_URL", f"sqlite:///{TEST_DB_PATH}")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from fastapi.testclient import TestClient
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from projecthub.core.config import settings
from projecthub.core.database import Base, build_engine, get_db
from projecthub.main import app
from projecthub.models import registry  # noqa: F401
from projecthub.oauth2 import create_access_token


class AttrDict(dict):
    """Dict with attribute-style access for fixtures."""

    def __getattr__(self, item: str) -> Any:
        try:
            return self[item]
        except KeyError as exc:
            raise AttributeError(item) from exc


def _init_test_engine():
    database_url = settings.get_database_url(use_test=True)
    url = make_url(database_url)

    # Safety: never run tests against a non-test Postgres database.
    if url.drivername.startswith("postgresql") and not (url.database or "").endswith(
        "_test"
    ):
        raise RuntimeError(
            f"Refusing to run tests against non-test database '{url.database}'. "
            "Set TEST_DATABASE_URL to a dedicated *_test database."
        )
    if url.drivername.startswith("sqlite") and url.database:
        Path(url.database).unlink(missing_ok=True)

    return build_engine(database_url)


engine = _init_test_engine()
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base.metadata.create_all(bind=engine)


@pytest.fixture(autouse=True, scope="function")
def _clean_db_between_tests():
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())
    yield


@pytest.fixture(scope="function")
def session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client(session):
    def override_get_db():
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        try:
            yield test_client
        finally:
            app.dependency_overrides.clear()


def _register(client, username: str, email: str, password: str = "password123"):
    res = client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password},
    )
    assert res.status_code == 201, res.text
    body = res.json()
    return AttrDict(
        id=body["user"]["id"],
        username=username,
        email=email,
        password=password,
        token=body["token"],
    )


@pytest.fixture(scope="function")
def test_user(client):
    return _register(client, "alice", "alice@example.com")


@pytest.fixture(scope="function")
def test_user2(client):
    return _register(client, "bob", "bob@example.com")


@pytest.fixture(scope="function")
def test_user3(client):
    return _register(client, "carol", "carol@example.com")


@pytest.fixture(scope="function")
def token(test_user):
    return create_access_token({"user_id": test_user["id"]})


@pytest.fixture(scope="function")
def authorized_client(client, token):
    client.headers.update({"Authorization": f"Bearer {token}"})
    return client


@pytest.fixture(scope="function")
def auth_headers():
    """Build bearer headers for any registered user fixture."""

    def _headers(user) -> dict:
        return {"Authorization": f"Bearer {create_access_token({'user_id': user['id']})}"}

    return _headers


@pytest.fixture(scope="function")
def test_project(authorized_client):
    res = authorized_client.post(
        "/api/projects",
        json={"name": "Compiler", "description": "A toy compiler"},
    )
    assert res.status_code == 201, res.text
    return AttrDict(res.json()["project"])


@pytest.fixture(scope="function")
def shared_project(authorized_client, test_project, test_user2):
    """`test_project` owned by test_user with test_user2 added as a collaborator."""
    res = authorized_client.post(
        f"/api/projects/{test_project['id']}/collaborators",
        json={"email": test_user2["email"]},
    )
    assert res.status_code == 201, res.text
    return AttrDict(res.json()["project"])
