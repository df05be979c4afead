"""REST endpoints for filter-driven rendering and registered taxonomies."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from ..content import RenderContext, render_post
from ..extensions import host, limiter
from ..utils.auth import require_capability

bp = Blueprint("content", __name__)


@bp.post("/render")
@require_capability("read")
@limiter.limit("30 per minute")
def render_content() -> tuple[object, int]:
    payload = request.get_json(force=True, silent=True) or {}

    title = payload.get("title", "")
    content = payload.get("content", "")
    context = payload.get("context") or {}

    if not isinstance(title, str):
        return jsonify({"error": "title must be a string"}), HTTPStatus.BAD_REQUEST
    if not isinstance(content, str):
        return jsonify({"error": "content must be a string"}), HTTPStatus.BAD_REQUEST
    if not isinstance(context, dict):
        return jsonify({"error": "context must be an object"}), HTTPStatus.BAD_REQUEST

    rendered = render_post(title, content, RenderContext.from_mapping(context))
    return (
        jsonify({"title": str(rendered.title), "content": str(rendered.content)}),
        HTTPStatus.OK,
    )


@bp.get("/taxonomies")
@require_capability("read")
def list_taxonomies() -> tuple[object, int]:
    object_type = request.args.get("object_type") or None
    taxonomies = host.taxonomies.get_taxonomies(object_type, show_in_rest=True)
    return jsonify([taxonomy.to_dict() for taxonomy in taxonomies]), HTTPStatus.OK
