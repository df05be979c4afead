"""Public pages rendered through the content filters."""

from __future__ import annotations

from flask import Blueprint, render_template, request
from markupsafe import escape

from .assets import get_style_queue
from .content import RenderContext, render_post
from .extensions import host

bp = Blueprint("site", __name__)


@bp.get("/preview")
def preview() -> str:
    """Render a post built from ``title`` and ``content`` query parameters."""

    title = request.args.get("title", "")
    content = request.args.get("content", "")

    host.hooks.do_action("enqueue_scripts")
    # Query-string content is untrusted, so it is escaped before filtering.
    rendered = render_post(title, escape(content), RenderContext())
    return render_template(
        "site/preview.html",
        plain_title=title,
        title=rendered.title,
        content=rendered.content,
        styles=get_style_queue().render(),
    )
