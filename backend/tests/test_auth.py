"""Authentication and capability tests for the API and admin pages."""

from __future__ import annotations

import pytest

from backend.hookpress.extensions import limiter


def test_token_issuance_and_listing(client, admin_headers):
    response = client.post(
        "/api/auth/tokens",
        json={"name": "Readonly Token", "role": "readonly"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    created = response.get_json()
    assert created["role"] == "readonly"
    assert created["capabilities"] == ["read"]
    assert created["token"]

    list_response = client.get("/api/auth/tokens", headers=admin_headers)
    assert list_response.status_code == 200
    tokens = list_response.get_json()
    stored = next(token for token in tokens if token["id"] == created["id"])
    assert "token" not in stored
    assert stored["revoked_at"] is None


def test_token_issuance_validation(client, admin_headers):
    missing_name = client.post("/api/auth/tokens", json={"role": "admin"}, headers=admin_headers)
    assert missing_name.status_code == 400

    bad_role = client.post(
        "/api/auth/tokens", json={"name": "x", "role": "owner"}, headers=admin_headers
    )
    assert bad_role.status_code == 400


def test_protection_toggle(client, admin_headers):
    status_response = client.get("/api/auth/protection")
    assert status_response.status_code == 200
    assert status_response.get_json()["enabled"] is False

    assert client.get("/api/entries").status_code == 200

    enable = client.post("/api/auth/protection", json={"enabled": "yes"})
    assert enable.get_json() == {"enabled": True}
    try:
        assert client.get("/api/entries").status_code == 401
        assert client.get("/admin/options?page=entries-crud").status_code == 403
        assert client.post("/api/auth/protection", json={"enabled": False}).status_code == 401
    finally:
        disable = client.post(
            "/api/auth/protection", json={"enabled": False}, headers=admin_headers
        )
        assert disable.status_code == 200

    assert client.get("/api/entries").status_code == 200


def test_protection_requires_flag(client):
    assert client.post("/api/auth/protection", json={}).status_code == 400


@pytest.mark.usefixtures("protection")
def test_admin_pages_follow_capabilities(client, readonly_headers, admin_headers):
    readonly_index = client.get("/admin/", headers=readonly_headers)
    assert readonly_index.status_code == 200
    assert "page=entries-crud" not in readonly_index.get_data(as_text=True)

    admin_index = client.get("/admin/", headers=admin_headers)
    assert "page=entries-crud" in admin_index.get_data(as_text=True)

    page = client.get("/admin/options?page=entries-crud", headers=admin_headers)
    assert page.status_code == 200


@pytest.mark.usefixtures("protection")
def test_revoked_token_is_rejected(client, admin_headers):
    issued = client.post(
        "/api/auth/tokens",
        json={"name": "Temp", "role": "readonly"},
        headers=admin_headers,
    )
    token_data = issued.get_json()
    readonly_headers = {"Authorization": f"Bearer {token_data['token']}"}

    assert client.get("/api/entries", headers=readonly_headers).status_code == 200

    revoke = client.delete(f"/api/auth/tokens/{token_data['id']}", headers=admin_headers)
    assert revoke.status_code == 204

    revoked_access = client.get("/api/entries", headers=readonly_headers)
    assert revoked_access.status_code == 401
    assert revoked_access.get_json()["error"] == "token revoked"


def test_rate_limit_for_render_endpoint(client):
    try:
        for _ in range(30):
            response = client.post("/api/render", json={"title": "t", "content": "c"})
            assert response.status_code == 200

        blocked = client.post("/api/render", json={"title": "t", "content": "c"})
        assert blocked.status_code == 429
    finally:
        limiter.reset()
