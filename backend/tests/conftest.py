from __future__ import annotations

import pathlib
import secrets
import sys
from collections.abc import Callable

import pytest
from sqlalchemy.pool import StaticPool

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def _load_dependencies():
    from hookpress import Config, create_app
    from backend.hookpress.extensions import db

    return Config, create_app, db


ConfigBase, create_app, db = _load_dependencies()


class TestConfig(ConfigBase):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite+pysqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    }
    CORS_ALLOWED_ORIGINS = "http://localhost"
    DB_INIT_MAX_RETRIES = 1


@pytest.fixture(scope="module")
def app():
    app = create_app(TestConfig)
    ctx = app.app_context()
    ctx.push()
    yield app
    db.session.remove()
    ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def auth_header_factory(app):
    from backend.hookpress.models.auth import ApiToken
    from backend.hookpress.utils.auth import hash_token

    created_tokens: list[ApiToken] = []

    def factory(role: str = "admin", name: str | None = None) -> dict[str, str]:
        token_value = secrets.token_urlsafe(16)
        token = ApiToken(
            name=name or f"Test {role.title()} Token",
            role=role,
            token_hash=hash_token(token_value),
        )
        db.session.add(token)
        db.session.commit()
        created_tokens.append(token)
        return {"Authorization": f"Bearer {token_value}"}

    yield factory

    for token in created_tokens:
        db.session.delete(token)
    db.session.commit()


@pytest.fixture(autouse=True)
def cleanup_tables(app):
    from backend.hookpress.models.auth import ApiToken
    from backend.hookpress.models.entry import Entry
    from backend.hookpress.models.settings import AppSetting

    yield

    db.session.rollback()
    db.session.query(ApiToken).delete()
    db.session.query(AppSetting).delete()
    db.session.query(Entry).delete()
    db.session.commit()


@pytest.fixture()
def admin_headers(auth_header_factory: Callable[..., dict[str, str]]):
    return auth_header_factory(role="admin")


@pytest.fixture()
def readonly_headers(auth_header_factory: Callable[..., dict[str, str]]):
    return auth_header_factory(role="readonly")


@pytest.fixture()
def protection(client, admin_headers):
    """Switch capability checks on for the duration of a test."""

    response = client.post("/api/auth/protection", json={"enabled": True})
    assert response.status_code == 200
    yield
    response = client.post(
        "/api/auth/protection", json={"enabled": False}, headers=admin_headers
    )
    assert response.status_code == 200
