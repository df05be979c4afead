"""Admin console that lists, adds, edits and deletes entries."""
from __future__ import annotations

import re

from flask import current_app, redirect, render_template, request, url_for
from werkzeug.wrappers import Response

from ..admin.nonce import create_nonce, verify_nonce
from ..admin.notices import add_admin_notice
from ..assets import get_style_queue
from ..entries import (
    AddFormRoute,
    DeleteRoute,
    EditFormRoute,
    EntryService,
    get_entry_store,
    parse_route,
)
from ..extensions import db, host
from ..hooks import action_hook
from ..models.entry import FK_MAX_LENGTH, FV_MAX_LENGTH, Entry
from ..utils.auth import current_user_can

SLUG = "entries_crud"
NAME = "Entries CRUD"
DESCRIPTION = "Manages create, read, update and delete operations for the entries table."

PAGE_SLUG = "entries-crud"
CAPABILITY = "manage_options"
NONCE_ACTION = "entries_crud_action"
NONCE_FIELD = "entries_crud_nonce"
STYLE_HANDLE = "entries-crud-admin-style"

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")


def activate() -> None:
    """Create the entries table if it does not exist yet."""

    Entry.__table__.create(bind=db.engine, checkfirst=True)
    current_app.logger.info("Entries table ready")


def register_admin_page() -> None:
    host.menu.add_options_page("Entries CRUD", "Entries", CAPABILITY, PAGE_SLUG, render_page)


def _service() -> EntryService:
    return EntryService(get_entry_store())


def _list_url(message: str | None = None) -> str:
    if message is None:
        return url_for("admin.options_page", page=PAGE_SLUG)
    return url_for("admin.options_page", page=PAGE_SLUG, message=message)


def render_page() -> Response | str:
    service = _service()
    route = parse_route(request.args)

    if isinstance(route, AddFormRoute):
        return _render_form(service)
    if isinstance(route, EditFormRoute):
        return _render_form(service, route.entry_id)
    if isinstance(route, DeleteRoute):
        service.delete_entry(route.entry_id, lambda: current_user_can(CAPABILITY))
        return redirect(_list_url("Entry deleted successfully."))

    if request.method == "POST" and "submit_add_edit" in request.form:
        if verify_nonce(NONCE_ACTION, request.form.get(NONCE_FIELD)):
            return _save_entry(service)
        current_app.logger.warning("Entry form submitted without a valid token, save skipped")

    return render_template("admin/entries_list.html", entries=service.list_entries(), slug=PAGE_SLUG)


def _render_form(service: EntryService, entry_id: int | None = None) -> str:
    entry = None
    form_title = "Add New Entry"
    if entry_id is not None:
        entry = service.get_entry(entry_id)
        if entry is None:
            add_admin_notice("Entry not found.", "error")
            return ""
        form_title = f"Edit Entry (ID: {entry_id})"

    return render_template(
        "admin/entry_form.html",
        entry=entry,
        form_title=form_title,
        slug=PAGE_SLUG,
        nonce=create_nonce(NONCE_ACTION),
        nonce_field=NONCE_FIELD,
        fk_max=FK_MAX_LENGTH,
        fv_max=FV_MAX_LENGTH,
    )


def _form_id() -> int:
    """Read the leading integer of the posted id, 0 when there is none."""

    match = _LEADING_INT_RE.match(request.form.get("id") or "")
    if match is None:
        return 0
    return max(int(match.group(1)), 0)


def _save_entry(service: EntryService) -> Response:
    entry_id = _form_id()
    fk = request.form.get("fk")
    fv = request.form.get("fv")

    if entry_id:
        service.update_entry(entry_id, fk, fv)
        message = "Entry updated successfully."
    else:
        service.create_entry(fk, fv)
        message = "Entry added successfully."
    return redirect(_list_url(message))


def show_flash_message() -> None:
    if request.args.get("page") != PAGE_SLUG:
        return
    message = request.args.get("message")
    if message:
        add_admin_notice(message, "success")


def enqueue_admin_styles(hook_suffix: str) -> None:
    if hook_suffix != f"settings_page_{PAGE_SLUG}":
        return
    get_style_queue().enqueue_style(
        STYLE_HANDLE, url_for("static", filename="entries-admin.css"), "1.0"
    )


HOOKS = [
    action_hook(f"activate_{SLUG}", activate),
    action_hook("admin_menu", register_admin_page),
    action_hook("admin_notices", show_flash_message),
    action_hook("admin_enqueue_scripts", enqueue_admin_styles),
]
