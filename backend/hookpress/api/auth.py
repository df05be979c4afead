"""REST endpoints for API tokens and the capability-check switch."""

from __future__ import annotations

from datetime import UTC, datetime
from http import HTTPStatus

from flask import Blueprint, jsonify, request

from ..extensions import db
from ..models.auth import ROLE_CAPABILITIES, ApiToken
from ..utils.auth import (
    generate_token,
    hash_token,
    is_token_protection_enabled,
    normalize_token_protection_value,
    require_capability,
    set_token_protection_enabled,
)

bp = Blueprint("auth", __name__)


def _serialize(token: ApiToken) -> dict[str, object | None]:
    return {
        "id": token.id,
        "name": token.name,
        "role": token.role,
        "capabilities": sorted(ROLE_CAPABILITIES.get(token.role, ())),
        "created_at": token.created_at.isoformat() + "Z",
        "revoked_at": token.revoked_at.isoformat() + "Z" if token.revoked_at else None,
    }


@bp.post("/auth/tokens")
@require_capability("manage_options")
def create_token() -> tuple[object, int]:
    payload = request.get_json(force=True, silent=True) or {}
    name = (payload.get("name") or "").strip()
    role = (payload.get("role") or "readonly").strip().lower()

    if not name:
        return jsonify({"error": "name is required"}), HTTPStatus.BAD_REQUEST

    if role not in ROLE_CAPABILITIES:
        return jsonify({"error": "role must be 'admin' or 'readonly'"}), HTTPStatus.BAD_REQUEST

    plaintext = generate_token()
    token = ApiToken(name=name, role=role, token_hash=hash_token(plaintext))
    db.session.add(token)
    db.session.commit()

    response_payload = _serialize(token)
    response_payload["token"] = plaintext
    return jsonify(response_payload), HTTPStatus.CREATED


@bp.get("/auth/tokens")
@require_capability("manage_options")
def list_tokens() -> tuple[object, int]:
    tokens = ApiToken.query.order_by(ApiToken.created_at.desc()).all()
    return jsonify([_serialize(token) for token in tokens]), HTTPStatus.OK


@bp.delete("/auth/tokens/<int:token_id>")
@require_capability("manage_options")
def revoke_token(token_id: int) -> tuple[object, int]:
    token = db.get_or_404(ApiToken, token_id)
    if token.revoked_at is None:
        token.revoked_at = datetime.now(UTC)
        db.session.commit()
    return "", HTTPStatus.NO_CONTENT


@bp.get("/auth/protection")
def get_protection() -> tuple[object, int]:
    return jsonify({"enabled": is_token_protection_enabled()}), HTTPStatus.OK


@bp.post("/auth/protection")
@require_capability("manage_options")
def update_protection() -> tuple[object, int]:
    payload = request.get_json(force=True, silent=True) or {}
    if "enabled" not in payload:
        return jsonify({"error": "enabled is required"}), HTTPStatus.BAD_REQUEST

    enabled = normalize_token_protection_value(payload["enabled"])
    set_token_protection_enabled(enabled)
    return jsonify({"enabled": enabled}), HTTPStatus.OK
