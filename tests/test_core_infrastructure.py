import json
import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from projecthub.core.config.settings import DEFAULT_SQLITE_URL, Settings
from projecthub.core.error_handlers import create_error_response, register_exception_handlers
from projecthub.core.exceptions import (
    OwnershipRequiredException,
    ResourceConflictException,
    ResourceNotFoundException,
)
from projecthub.core.logging_config import (
    JSONFormatter,
    bind_request_context,
    request_id_ctx,
    reset_request_context,
)


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {"status": "OK", "message": "API is running"}


def test_readyz(client):
    res = client.get("/readyz")
    assert res.status_code == 200
    assert res.json()["database"] == "connected"


def test_unknown_route(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert res.json()["message"] == "Route not found"


def test_request_id_is_echoed_or_generated(client):
    res = client.get("/api/health", headers={"X-Request-ID": "abc-123"})
    assert res.headers["X-Request-ID"] == "abc-123"
    assert client.get("/api/health").headers["X-Request-ID"]


def test_database_url_resolution(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("TEST_DATABASE_URL", raising=False)

    cfg = Settings(database_url=None, test_database_url=None)
    assert cfg.get_database_url() == DEFAULT_SQLITE_URL

    cfg = Settings(database_url="postgresql://db/app", test_database_url="sqlite://")
    assert cfg.get_database_url() == "postgresql://db/app"
    assert cfg.get_database_url(use_test=True) == "sqlite://"


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
    assert Settings().cors_origins == ["http://a.test", "http://b.test"]


def test_cors_origins_default_and_explicit(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    assert Settings().cors_origins == ["*"]
    assert Settings(cors_origins=["http://c.test"]).cors_origins == ["http://c.test"]


def test_json_formatter_includes_context():
    record = logging.LogRecord("projecthub", logging.INFO, __file__, 1, "hello", None, None)
    record.request_id = "req-1"
    record.project_id = 7

    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["request_id"] == "req-1"
    assert payload["project_id"] == 7


def test_request_context_binding_resets():
    tokens = bind_request_context(request_id="r-42")
    assert request_id_ctx.get() == "r-42"
    reset_request_context(tokens)
    assert request_id_ctx.get() is None


def test_error_response_shape():
    res = create_error_response(404, "not_found", "Project not found")
    assert json.loads(res.body) == {"message": "Project not found", "error_code": "not_found"}


@pytest.mark.parametrize(
    "exc, status_code, message",
    [
        (ResourceNotFoundException("Project", 1), 404, "Project not found"),
        (ResourceConflictException("User already exists"), 400, "User already exists"),
        (
            OwnershipRequiredException("project"),
            403,
            "Only project owner can perform this action",
        ),
    ],
)
def test_app_exceptions_map_to_status(exc, status_code, message):
    app = FastAPI()
    app.state.environment = "test"
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise exc

    res = TestClient(app).get("/boom")
    assert res.status_code == status_code
    assert res.json()["message"] == message


def test_unhandled_error_hides_details_in_production():
    app = FastAPI()
    app.state.environment = "production"
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("secret internals")

    res = TestClient(app, raise_server_exceptions=False).get("/boom")
    assert res.status_code == 500
    assert res.json() == {
        "message": "Internal Server Error",
        "error_code": "internal_server_error",
    }
