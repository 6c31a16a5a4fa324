"""
tests/conftest.py — pytest fixtures for ForgeGuard
"""
import os
import copy
import pytest

os.environ.setdefault("FLASK_ENV", "testing")

from app import create_app  # noqa: E402
from engine.sample import SAMPLE_METADATA  # noqa: E402
from extensions import db  # noqa: E402


@pytest.fixture(scope="session")
def app():
    """Create a test Flask application."""
    application = create_app("testing")
    with application.app_context():
        db.create_all()
        yield application
        db.drop_all()


@pytest.fixture()
def client(app):
    """Test client for API integration tests."""
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


# ── Metadata fixtures ─────────────────────────────────────────────────────────

@pytest.fixture()
def sample_metadata():
    """Known-bad metadata: 6 HIGH + 5 MEDIUM findings."""
    return copy.deepcopy(SAMPLE_METADATA)


@pytest.fixture()
def clean_metadata():
    """Metadata that passes every check."""
    return {
        "tables": [
            {"name": "users", "columns": [
                {"name": "id", "type": "uuid", "primaryKey": True},
                {"name": "email", "type": "text", "nullable": False},
            ]},
            {"name": "posts", "columns": [
                {"name": "id", "type": "uuid", "primaryKey": True},
                {"name": "title", "type": "text"},
                {"name": "user_id", "type": "uuid",
                 "foreignKey": {"table": "users", "column": "id"}},
            ]},
        ],
        "authRules": [
            {"endpoint": "/posts", "method": "GET", "requiresAuth": False, "rolesAllowed": []},
            {"endpoint": "/posts", "method": "POST", "requiresAuth": True, "rolesAllowed": ["user"]},
            {"endpoint": "/posts", "method": "DELETE", "requiresAuth": True, "rolesAllowed": ["admin"]},
        ],
        "functions": [
            {"name": "purge_posts", "isDestructive": True, "touchesTables": ["posts"]},
        ],
    }


class FakeResponse:
    """Stand-in for requests.Response in upstream fetch tests."""

    def __init__(self, status_code=200, payload=None, text=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._payload = payload
        self.text = text if text is not None else ""

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture()
def fake_upstream(monkeypatch):
    """Patch requests.get; returns a dict recording the last call."""
    calls = {}

    def install(response=None, exc=None):
        def fake_get(url, headers=None, timeout=None):
            calls.update(url=url, headers=headers, timeout=timeout)
            if exc is not None:
                raise exc
            return response
        monkeypatch.setattr("metadata_source.requests.get", fake_get)
        return calls

    return install
