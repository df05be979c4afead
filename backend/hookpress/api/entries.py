"""REST API endpoints for managing entries."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any

from flask import Blueprint, jsonify, request

from ..entries import EntryService, get_entry_store
from ..errors import ValidationError
from ..utils.auth import current_user_can, require_capability

bp = Blueprint("entries", __name__)


def _service() -> EntryService:
    return EntryService(get_entry_store())


def _validate_entry_payload(payload: dict[str, Any]) -> list[str]:
    """Report missing fields before they reach the service."""

    errors: list[str] = []
    for field in ("fk", "fv"):
        value = payload.get(field)
        if value is None:
            errors.append(f"{field} is required")
        elif not isinstance(value, str):
            errors.append(f"{field} must be a string")
    return errors


def _not_found() -> tuple[object, int]:
    return jsonify({"error": "entry not found"}), HTTPStatus.NOT_FOUND


@bp.get("/entries")
@require_capability("read")
def list_entries() -> tuple[object, int]:
    entries = _service().list_entries()
    return jsonify([entry.to_dict() for entry in entries]), HTTPStatus.OK


@bp.post("/entries")
@require_capability("manage_options")
def create_entry() -> tuple[object, int]:
    payload = request.get_json(force=True, silent=True) or {}
    errors = _validate_entry_payload(payload)
    if errors:
        return jsonify({"errors": errors}), HTTPStatus.BAD_REQUEST

    service = _service()
    try:
        entry_id = service.create_entry(payload["fk"], payload["fv"])
    except ValidationError as exc:
        return jsonify({"errors": [exc.message]}), HTTPStatus.BAD_REQUEST

    entry = service.get_entry(entry_id)
    return jsonify(entry.to_dict()), HTTPStatus.CREATED


@bp.get("/entries/<int:entry_id>")
@require_capability("read")
def get_entry(entry_id: int) -> tuple[object, int]:
    entry = _service().get_entry(entry_id)
    if entry is None:
        return _not_found()
    return jsonify(entry.to_dict()), HTTPStatus.OK


@bp.put("/entries/<int:entry_id>")
@require_capability("manage_options")
def update_entry(entry_id: int) -> tuple[object, int]:
    payload = request.get_json(force=True, silent=True) or {}
    errors = _validate_entry_payload(payload)
    if errors:
        return jsonify({"errors": errors}), HTTPStatus.BAD_REQUEST

    service = _service()
    try:
        affected = service.update_entry(entry_id, payload["fk"], payload["fv"])
    except ValidationError as exc:
        return jsonify({"errors": [exc.message]}), HTTPStatus.BAD_REQUEST
    if not affected:
        return _not_found()

    return jsonify(service.get_entry(entry_id).to_dict()), HTTPStatus.OK


@bp.delete("/entries/<int:entry_id>")
@require_capability("manage_options")
def delete_entry(entry_id: int) -> tuple[object, int]:
    _service().delete_entry(entry_id, lambda: current_user_can("manage_options"))
    return "", HTTPStatus.NO_CONTENT
