"""Admin screens that host the settings pages registered by plugins."""

from __future__ import annotations

from flask import Blueprint, abort, render_template, request
from markupsafe import Markup
from werkzeug.wrappers import Response

from ..assets import get_style_queue
from ..errors import PermissionDenied
from ..extensions import host
from ..utils.auth import current_user_can
from .notices import get_admin_notices

bp = Blueprint("admin", __name__)


@bp.get("/")
def index() -> str:
    pages = [page for page in host.menu.pages() if current_user_can(page.capability)]
    return render_template("admin/index.html", pages=pages)


@bp.route("/options", methods=["GET", "POST"])
def options_page() -> Response | str:
    slug = request.args.get("page", "")
    admin_page = host.menu.get(slug)
    if admin_page is None:
        abort(404)

    if not current_user_can(admin_page.capability):
        raise PermissionDenied("Sorry, you are not allowed to access this page.")

    hooks = host.hooks
    hooks.do_action("admin_enqueue_scripts", admin_page.hook_suffix)

    result = admin_page.callback()
    if isinstance(result, Response):
        return result

    hooks.do_action("admin_notices")

    return render_template(
        "admin/layout.html",
        admin_page=admin_page,
        body=Markup(result or ""),
        notices=get_admin_notices(),
        styles=get_style_queue().render(),
    )
